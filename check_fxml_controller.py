#!/usr/bin/env python3
"""
Check that a JavaFX controller source file reflects the fx:id and onAction
attributes declared in an FXML file, without compiling the controller.

The FXML file is parsed as XML. Every element carrying an fx:id attribute
requires a field in the controller, and every element carrying an onAction
attribute requires an event handler. For example, if the FXML file contains:

  <TextField fx:id="textField" onAction="#handleTextFieldAction" />

then the controller should contain something similar to:

  @FXML private TextField textField;

  @FXML
  private void handleTextFieldAction() {
      ...
  }

Matching rules:

- Fields are accepted when declared with the @FXML annotation (optionally
  private or protected), or when declared public (annotation optional).
  Generic field types such as ListView<String> are accepted in both forms.
- Handlers are accepted when declared as "@FXML [private|protected] void
  name()" or "public void name()". Only handlers taking no parameters are
  recognized; "void name(ActionEvent e)" is reported missing.
- Comments are removed from the controller text before matching, so a
  commented-out declaration never satisfies a requirement.

The controller is searched with regular expressions over the raw text; it is
not parsed as Java. Comment removal is a single substitution, not a lexer,
and it will also remove "//" or "/* */" sequences that appear inside string
literals.

USAGE:
python check_fxml_controller.py view.fxml ViewController.java
python check_fxml_controller.py --verbose view.fxml ViewController.java
python check_fxml_controller.py --annotation @Binding view.fxml ViewController.java

EXIT STATUS:
  0  all required fields and handlers were found
  1  usage error, unreadable file, or malformed FXML
  2  the check ran and found missing items
"""

import argparse
import re
import sys
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple, Union
from xml.dom import expatbuilder, minidom
from xml.parsers.expat import ExpatError

# Default markers for FXML markup and JavaFX controllers.
ID_ATTRIBUTE = "fx:id"
ACTION_ATTRIBUTE = "onAction"
HANDLER_SIGIL = "#"
BINDING_ANNOTATION = "@FXML"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_MISSING_ITEMS = 2

# Block comments take their surrounding spaces/tabs and one following line
# break with them; line comments stop before the line break.
COMMENT_PATTERN = re.compile(
    r"[\t ]*/\*[\s\S]*?\*/[\t ]*(?:\r\n|[\n\x0b\x0c\r\x85\u2028\u2029])?"
    r"|//[^\n\r\x85\u2028\u2029]*"
)

# Optional access qualifier in front of an annotated declaration.
ACCESS_QUALIFIER = r"(?:(?:private|protected)\s+)?"

# ---------------------------------------------------------------------------
# Acceptance Rules
# ---------------------------------------------------------------------------
# Each requirement kind has an ordered rule table. Rules are tried in order
# and the first match wins. Templates are filled with regex-escaped values:
#   {annotation}  the binding annotation (e.g. @FXML)
#   {access}      ACCESS_QUALIFIER
#   {type}        the FXML element name (field requirements only)
#   {identifier}  the field or handler name

FIELD_DECLARATION_RULES: List[Dict[str, str]] = [
    {
        "name": "annotated field",
        "template": r"{annotation}\s+{access}{type}\s+{identifier}\s*;",
    },
    {
        "name": "public field",
        "template": r"public\s+{type}\s+{identifier}\s*;",
    },
    {
        "name": "annotated generic field",
        "template": r"{annotation}\s+{access}{type}\s*<\s*.+\s*>\s+{identifier}\s*;",
    },
    {
        "name": "public generic field",
        "template": r"public\s+{type}\s*<\s*.+\s*>\s+{identifier}\s*;",
    },
]

HANDLER_DECLARATION_RULES: List[Dict[str, str]] = [
    {
        "name": "annotated handler",
        "template": r"{annotation}\s+{access}void\s+{identifier}\s*\(\s*\)",
    },
    {
        "name": "public handler",
        "template": r"public\s+void\s+{identifier}\s*\(\s*\)",
    },
]

RULES_BY_KIND: Dict[str, List[Dict[str, str]]] = {
    "field": FIELD_DECLARATION_RULES,
    "handler": HANDLER_DECLARATION_RULES,
}

# ---------------------------------------------------------------------------
# Data Model
# ---------------------------------------------------------------------------


class MarkupParseError(ValueError):
    """Raised when the FXML markup is not well-formed XML."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


@dataclass(frozen=True)
class CheckerConfig:
    """Attribute names and source markers used by one check."""

    id_attribute: str = ID_ATTRIBUTE
    action_attribute: str = ACTION_ATTRIBUTE
    handler_sigil: str = HANDLER_SIGIL
    binding_annotation: str = BINDING_ANNOTATION


DEFAULT_CONFIG = CheckerConfig()


@dataclass(frozen=True)
class FieldRequirement:
    """A field the controller must declare for an element with an fx:id."""

    element_type: str
    identifier: str
    kind: ClassVar[str] = "field"

    def display(self) -> str:
        return f"{self.element_type} {self.identifier}"

    def pattern_values(self) -> Dict[str, str]:
        return {"type": self.element_type, "identifier": self.identifier}


@dataclass(frozen=True)
class HandlerRequirement:
    """A no-argument handler the controller must declare for an onAction."""

    identifier: str
    kind: ClassVar[str] = "handler"

    def display(self) -> str:
        return self.identifier

    def pattern_values(self) -> Dict[str, str]:
        return {"identifier": self.identifier}


Requirement = Union[FieldRequirement, HandlerRequirement]

# A requirement paired with the name of the rule that accepted it, or None.
Outcome = Tuple[Requirement, Optional[str]]


@dataclass
class CheckResult:
    requirements: List[Requirement]
    missing_items: List[str]
    outcomes: List[Outcome] = field(default_factory=list)

    @property
    def missing_count(self) -> int:
        return len(self.missing_items)


# ---------------------------------------------------------------------------
# Markup Parsing and Requirement Extraction
# ---------------------------------------------------------------------------


def parse_markup(markup: Union[str, bytes]) -> minidom.Document:
    """
    Parse FXML markup into a DOM document.

    Namespace processing is off: qualified names are kept as written, so the
    fx:id attribute is reported by its name "fx:id" and <fx:include> by its
    tag name "fx:include", and a prefix without an xmlns declaration is
    accepted like any other name.

    Args:
        markup: The markup text. Bytes are decoded according to the XML
            declaration; str is used as-is.

    Returns:
        The parsed minidom Document.

    Raises:
        MarkupParseError: If the markup is empty or not well-formed.
    """
    try:
        return expatbuilder.parseString(markup, namespaces=False)
    except ExpatError as exc:
        raise MarkupParseError(
            f"FXML is not well-formed: {exc}",
            line=getattr(exc, "lineno", None),
            column=getattr(exc, "offset", None),
        ) from exc


def strip_handler_sigil(value: str, sigil: str = HANDLER_SIGIL) -> str:
    """
    Remove the leading handler sigil from an onAction value.

    Examples:
        >>> strip_handler_sigil("#handleSave")
        'handleSave'
        >>> strip_handler_sigil("handleSave")
        'handleSave'
    """
    if sigil and value.startswith(sigil):
        return value[len(sigil):]
    return value


def element_requirements(element: minidom.Element,
                         config: CheckerConfig = DEFAULT_CONFIG) -> List[Requirement]:
    """
    Build the requirements contributed by a single element.

    An attribute qualifies when its serialized form, name="value", contains
    the configured marker. Attributes are visited in name order so the
    result does not depend on how the FXML author ordered them. An element
    contributes one requirement per qualifying attribute.
    """
    requirements: List[Requirement] = []
    for name, value in sorted(element.attributes.items()):
        serialized = f'{name}="{value}"'
        if config.id_attribute in serialized:
            requirements.append(FieldRequirement(element.tagName, value))
        if config.action_attribute in serialized:
            requirements.append(
                HandlerRequirement(strip_handler_sigil(value, config.handler_sigil)))
    return requirements


def collect_requirements(root: minidom.Element,
                         config: CheckerConfig = DEFAULT_CONFIG) -> List[Requirement]:
    """
    Walk the element tree depth-first in document order and collect the
    requirements of every element. Text and other non-element nodes are
    skipped.
    """
    requirements: List[Requirement] = []
    stack = [root]
    while stack:
        node = stack.pop()
        requirements.extend(element_requirements(node, config))
        children = [child for child in node.childNodes
                    if child.nodeType == child.ELEMENT_NODE]
        stack.extend(reversed(children))
    return requirements


def extract_requirements(markup: Union[str, bytes],
                         config: CheckerConfig = DEFAULT_CONFIG) -> List[Requirement]:
    """Parse FXML markup and return its requirements in document order."""
    document = parse_markup(markup)
    return collect_requirements(document.documentElement, config)


# ---------------------------------------------------------------------------
# Controller Verification
# ---------------------------------------------------------------------------


def strip_comments(source_text: str) -> str:
    """
    Remove block and line comments from controller source text.

    This is a single regex substitution rather than a Java tokenizer; comment
    markers inside string literals are removed as well.

    Examples:
        >>> strip_comments("int a; // note\\nint b;")
        'int a; \\nint b;'
        >>> strip_comments("  /* gone */\\nint c;")
        'int c;'
    """
    return COMMENT_PATTERN.sub("", source_text)


def build_rule_pattern(template: str, requirement: Requirement,
                       config: CheckerConfig = DEFAULT_CONFIG) -> "re.Pattern[str]":
    """Fill a rule template for one requirement and compile it."""
    values = {name: re.escape(value) for name, value in requirement.pattern_values().items()}
    pattern = template.format(
        annotation=re.escape(config.binding_annotation),
        access=ACCESS_QUALIFIER,
        **values,
    )
    # \s is ASCII whitespace only; U+00A0 does not separate tokens.
    return re.compile(pattern, re.DOTALL | re.ASCII)


def match_requirement(requirement: Requirement, source_text: str,
                      config: CheckerConfig = DEFAULT_CONFIG) -> Optional[str]:
    """
    Find the first acceptance rule satisfied by the controller text.

    A rule is satisfied when its pattern occurs anywhere in the text, which
    is the same as an anchored match of ".*pattern.*" over the whole text
    with "." matching line breaks.

    Args:
        requirement: The field or handler requirement to look for.
        source_text: Controller text with comments already removed.
        config: Markers to use.

    Returns:
        The name of the matching rule, or None if no rule matched.
    """
    for rule in RULES_BY_KIND[requirement.kind]:
        if build_rule_pattern(rule["template"], requirement, config).search(source_text):
            return rule["name"]
    return None


def verify_requirements(requirements: Sequence[Requirement], source_text: str,
                        config: CheckerConfig = DEFAULT_CONFIG) -> List[str]:
    """
    Return the display strings of requirements the controller does not meet.

    Order follows the requirement list; duplicates are checked and reported
    independently.
    """
    outcomes = evaluate_requirements(requirements, source_text, config)
    return missing_from_outcomes(outcomes)


def evaluate_requirements(requirements: Sequence[Requirement], source_text: str,
                          config: CheckerConfig = DEFAULT_CONFIG) -> List[Outcome]:
    """Pair each requirement with the name of the rule that accepted it, or None."""
    return [(requirement, match_requirement(requirement, source_text, config))
            for requirement in requirements]


def missing_from_outcomes(outcomes: Sequence[Outcome]) -> List[str]:
    missing_items: List[str] = []
    for requirement, rule_name in outcomes:
        if rule_name is None:
            missing_items.append(requirement.display())
    return missing_items


def check_controller(markup: Union[str, bytes], source_text: str,
                     config: Optional[CheckerConfig] = None) -> CheckResult:
    """
    Run the full check for one FXML/controller pair.

    Args:
        markup: FXML markup text.
        source_text: Raw controller source text (comments are removed here).
        config: Markers to use; defaults to FXML and @FXML.

    Returns:
        A CheckResult with the requirements found in the markup, the rule
        that accepted each one, and the display strings of those missing
        from the controller.

    Raises:
        MarkupParseError: If the markup is not well-formed.
    """
    config = config or DEFAULT_CONFIG
    requirements = extract_requirements(markup, config)
    outcomes = evaluate_requirements(requirements, strip_comments(source_text), config)
    return CheckResult(
        requirements=requirements,
        missing_items=missing_from_outcomes(outcomes),
        outcomes=outcomes,
    )


# ---------------------------------------------------------------------------
# Command Line
# ---------------------------------------------------------------------------


class _ArgumentParser(argparse.ArgumentParser):
    # Exit status 2 is reserved for "missing items found".
    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def read_file_into_string(path: str) -> str:
    """Read a controller file as UTF-8 text with normalized line breaks."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def read_markup_file(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def format_report(missing_items: Sequence[str]) -> str:
    """
    Render the missing-items report: a blank line, the "N MISSING ITEMS: "
    header, a blank line, one item per line, and a closing blank line.
    """
    lines = ["", f"{len(missing_items)} MISSING ITEMS: ", ""]
    lines.extend(missing_items)
    lines.append("")
    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        description="Check that a JavaFX controller declares the fields and handlers "
                    "referenced by an FXML file."
    )
    parser.add_argument("fxml_file", help="Path to the FXML file.")
    parser.add_argument("controller_file", help="Path to the Java controller file.")
    parser.add_argument(
        "--annotation",
        default=BINDING_ANNOTATION,
        help=f"Annotation that binds a field or handler (default: {BINDING_ANNOTATION})"
    )
    parser.add_argument(
        "--id-attribute",
        default=ID_ATTRIBUTE,
        help=f"Attribute naming a bound field (default: {ID_ATTRIBUTE})"
    )
    parser.add_argument(
        "--action-attribute",
        default=ACTION_ATTRIBUTE,
        help=f"Attribute naming an action handler (default: {ACTION_ATTRIBUTE})"
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "--verbose",
        action="store_true",
        help="Print every requirement with the rule that accepted it"
    )
    output.add_argument(
        "--quiet",
        action="store_true",
        help="Print nothing; report through the exit status only"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = CheckerConfig(
        id_attribute=args.id_attribute,
        action_attribute=args.action_attribute,
        binding_annotation=args.annotation,
    )

    # 1) Read both inputs before running any check.
    try:
        controller_text = read_file_into_string(args.controller_file)
        markup = read_markup_file(args.fxml_file)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    # 2) Extract requirements from the FXML and verify them.
    try:
        result = check_controller(markup, controller_text, config)
    except MarkupParseError as exc:
        print(f"Error: {args.fxml_file}: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    if args.verbose:
        for requirement, rule_name in result.outcomes:
            outcome = f"ok ({rule_name})" if rule_name else "MISSING"
            print(f"  {requirement.kind:<8} {requirement.display()}: {outcome}")

    # 3) Report.
    if not args.quiet:
        print(format_report(result.missing_items), end="")

    if result.missing_items:
        return EXIT_MISSING_ITEMS
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

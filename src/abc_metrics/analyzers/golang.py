import logging
from typing import Callable, Dict, List, Optional, Tuple, Union

from tree_sitter import Node

from abc_metrics.analyzers import analyzer
from abc_metrics.analyzers.base import Analyzer
from abc_metrics.errors import GoParseError, PathLike
from abc_metrics.metrics import ABCMetrics, Evidence
from abc_metrics.utils.go_parser import first_error, parse, position

logger = logging.getLogger(__name__)

_CONDITION_LABELS: Dict[str, str] = {
    "if_statement": "if statement",
    "expression_switch_statement": "switch statement",
    "type_switch_statement": "type switch",
    "select_statement": "select statement",
}
# Field holding the match values of each case kind; default_case has none
_CASE_VALUE_FIELDS: Dict[str, str] = {
    "expression_case": "value",
    "type_case": "type",
}
_LOGICAL_OPERATORS = {"&&", "||"}
_IDENTIFIERS = {"identifier", "blank_identifier"}


def _text(node: Node) -> str:
    return node.text.decode("utf8", errors="replace")


def _evidence(node: Node, text: str, context: str) -> Evidence:
    line, col = position(node)
    return Evidence(line=line, column=col, text=text, context=context)


def _targets(left: Node) -> List[Node]:
    if left.type != "expression_list":
        return [left]
    return [c for c in left.named_children if c.type != "comment"]


def _is_type_switch_alias(node: Node, parent: Optional[Node]) -> bool:
    # the v in `switch v := x.(type)` binds like an assignment
    return (
        parent is not None
        and parent.type == "type_switch_statement"
        and node == parent.child_by_field_name("alias")
    )


def _callee_name(fn: Node) -> str:
    if fn is None:
        return "unknown"
    if fn.type == "identifier":
        return _text(fn)
    if fn.type == "selector_expression":
        operand = fn.child_by_field_name("operand")
        sel = fn.child_by_field_name("field")
        if sel is None:
            return "unknown"
        if operand is not None and operand.type == "identifier":
            return f"{_text(operand)}.{_text(sel)}"
        return _text(sel)
    return "unknown"


class GoVisitor:
    """
    Pre-order walk over a tree-sitter-go tree that classifies each node as
    an assignment, branch or condition and records it in ``metrics``.

    Node kinds missing from the dispatch table are ignored; their children
    are still visited.
    """

    def __init__(self, metrics: Optional[ABCMetrics] = None) -> None:
        self.metrics = metrics if metrics is not None else ABCMetrics()
        self._handlers: Dict[str, Callable[[Node], None]] = {
            "assignment_statement": self._assignment,
            "short_var_declaration": self._assignment,
            "receive_statement": self._assignment,
            "call_expression": self._call,
            "type_conversion_expression": self._call,
            "if_statement": self._condition,
            "expression_switch_statement": self._condition,
            "select_statement": self._condition,
            "type_switch_statement": self._condition,
            "for_statement": self._for,
            "expression_case": self._case,
            "type_case": self._case,
            "binary_expression": self._binary,
        }

    def traverse(self, root: Node) -> ABCMetrics:
        self._visit(root)
        return self.metrics

    def _visit(self, root: Node) -> None:
        stack: List[Tuple[Node, Optional[Node]]] = [(root, None)]
        while stack:
            node, parent = stack.pop()
            handler = self._handlers.get(node.type)
            if handler is not None:
                handler(node)
            elif _is_type_switch_alias(node, parent):
                self._record_targets(node, node)
            stack.extend((child, node) for child in reversed(node.children))

    def _record_targets(self, node: Node, left: Node) -> None:
        names = [_text(t) if t.type in _IDENTIFIERS else "expr" for t in _targets(left)]
        if not names:
            return
        self.metrics.add_assignment(
            _evidence(node, ", ".join(names), f"Assignment ({len(names)} variables)"),
            targets=len(names),
        )

    def _assignment(self, node: Node) -> None:
        # receive_statement only binds when it has a left side
        left = node.child_by_field_name("left")
        if left is not None:
            self._record_targets(node, left)

    def _call(self, node: Node) -> None:
        name = "unknown"
        # generic instantiations such as f[int](x) stay unnamed
        if node.type == "call_expression" and node.child_by_field_name("type_arguments") is None:
            name = _callee_name(node.child_by_field_name("function"))
        self.metrics.add_branch(_evidence(node, name, "Function call"))

    def _condition(self, node: Node) -> None:
        self.metrics.add_condition(_evidence(node, _CONDITION_LABELS[node.type], "Condition"))

    def _for(self, node: Node) -> None:
        ranged = any(c.type == "range_clause" for c in node.children)
        label = "for range loop" if ranged else "for loop"
        self.metrics.add_condition(_evidence(node, label, "Condition"))

    def _case(self, node: Node) -> None:
        if node.child_by_field_name(_CASE_VALUE_FIELDS[node.type]) is None:
            return
        self.metrics.add_condition(_evidence(node, "case clause", "Condition"))

    def _binary(self, node: Node) -> None:
        op = node.child_by_field_name("operator")
        if op is None or op.type not in _LOGICAL_OPERATORS:
            return
        self.metrics.add_condition(_evidence(node, op.type, "Logical operator"))


@analyzer(".go")
class GoAnalyzer(Analyzer):
    def analyze_source(self, code: Union[str, bytes], file_path: PathLike = "<string>") -> ABCMetrics:
        root = parse(code)
        if root.has_error:
            raise GoParseError(file_path, position(first_error(root)))
        if not any(c.type == "package_clause" for c in root.children):
            raise GoParseError(file_path, (1, 1), "expected 'package'")
        metrics = GoVisitor().traverse(root)
        logger.debug("%s: %s", file_path, metrics.render())
        return metrics

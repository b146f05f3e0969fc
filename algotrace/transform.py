"""Source transform: turns learner source into a guarded executable unit."""

from __future__ import annotations

import ast
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import CodeType

from . import constants
from .errors import CodeTransformError

logger = logging.getLogger(__name__)

LEARNER_FILENAME = "<learner>"


@dataclass(frozen=True)
class TransformedCode:
    code: CodeType
    entry_name: str | None
    guarded_loops: int


class CodeTransformer(ABC):
    """Abstract source-to-executable transform."""

    @abstractmethod
    def transform(self, source: str) -> TransformedCode: ...


def _is_literal_range(node: ast.expr) -> bool:
    """True for ``range(...)`` called with integer literals only."""
    if not (
        isinstance(node, ast.Call)
        and isinstance(node.func, ast.Name)
        and node.func.id == "range"
        and not node.keywords
        and 1 <= len(node.args) <= 3
    ):
        return False
    for arg in node.args:
        if isinstance(arg, ast.UnaryOp) and isinstance(arg.op, ast.USub):
            arg = arg.operand
        if not (isinstance(arg, ast.Constant) and type(arg.value) is int):
            return False
    return True


class _LoopGuardInjector(ast.NodeTransformer):
    def __init__(self):
        self.loop_count = 0

    def _guard(self, node: ast.stmt, kind: str) -> ast.stmt:
        call = ast.Expr(
            value=ast.Call(
                func=ast.Name(id=constants.LOOP_GUARD_NAME, ctx=ast.Load()),
                args=[ast.Constant(self.loop_count), ast.Constant(kind)],
                keywords=[],
            )
        )
        self.loop_count += 1
        return ast.copy_location(call, node)

    def visit_While(self, node: ast.While) -> ast.While:
        self.generic_visit(node)
        node.body.insert(0, self._guard(node, constants.LOOP_KIND_WHILE))
        return node

    def visit_For(self, node: ast.For) -> ast.For:
        self.generic_visit(node)
        if not _is_literal_range(node.iter):
            node.body.insert(0, self._guard(node, constants.LOOP_KIND_FOR))
        return node


def find_entry_function(tree: ast.Module) -> str | None:
    """Name of the first top-level ``def`` or lambda bound to a name."""
    for stmt in tree.body:
        if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
            return stmt.name
        if (
            isinstance(stmt, ast.Assign)
            and len(stmt.targets) == 1
            and isinstance(stmt.targets[0], ast.Name)
            and isinstance(stmt.value, ast.Lambda)
        ):
            return stmt.targets[0].id
    return None


class LoopGuardTransformer(CodeTransformer):
    """Injects an iteration-guard call as the first statement of every loop.

    ``for`` loops over ``range`` with integer-literal bounds are treated as
    obviously bounded and left alone. The guard is a heuristic: it flags
    long but finite loops and cannot see non-termination through recursion.
    """

    def transform(self, source: str) -> TransformedCode:
        try:
            tree = ast.parse(source, filename=LEARNER_FILENAME)
        except SyntaxError as exc:
            raise CodeTransformError(
                f"Syntax error: {exc.msg} (line {exc.lineno})", lineno=exc.lineno
            ) from exc
        injector = _LoopGuardInjector()
        tree = ast.fix_missing_locations(injector.visit(tree))
        logger.debug("Injected %d loop guards", injector.loop_count)
        try:
            code = compile(tree, LEARNER_FILENAME, "exec")
        except (SyntaxError, ValueError) as exc:
            raise CodeTransformError(f"Syntax error: {exc}") from exc
        return TransformedCode(
            code=code,
            entry_name=find_entry_function(tree),
            guarded_loops=injector.loop_count,
        )

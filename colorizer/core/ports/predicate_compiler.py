# colorizer/core/ports/predicate_compiler.py
from typing import Any, Mapping, Optional, Protocol

class IPredicate(Protocol):
    """
    A compiled boolean expression over a single event.
    The event is opaque to the colorizer; only the predicate inspects it.
    """

    def evaluate(self, event: Any, context: Optional[Mapping[str, Any]] = None) -> bool:
        """Returns True if the event satisfies the expression."""
        ...

class IPredicateCompiler(Protocol):
    """
    Port for the expression language.
    Implementations are supplied by the host application (e.g. the log viewer's
    query language); the colorizer never parses expression text itself.
    """

    def compile(self, expression: str) -> IPredicate:
        """
        Compiles rule text into an evaluable predicate.

        Args:
            expression: The rule source text (e.g. 'level == WARN').

        Returns:
            The compiled predicate.

        Raises:
            ExpressionCompileError: If the text is not a valid expression.
        """
        ...

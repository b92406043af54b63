"""
Exception classification policy.

Decides, for an error raised during an attempt, whether the executor should
swallow it and retry or abort immediately. Matching is done on the error's
ErrorKind tag, so the policy is pure: the same kind always classifies the
same way.

Classification only controls retry/no-retry. Whatever error was raised last
is what gets attached to a timed-out outcome.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from robust_query.models.enums import Classification, ErrorKind
from robust_query.queries.exceptions import error_kind

if TYPE_CHECKING:
    from robust_query.config import Settings

DEFAULT_RETRYABLE_KINDS: frozenset[ErrorKind] = frozenset(
    {
        ErrorKind.ELEMENT_NOT_FOUND,
        ErrorKind.STALE_ELEMENT,
        ErrorKind.WINDOW_NOT_FOUND,
        ErrorKind.TRANSIENT,
    }
)

# Never retried, whatever the caller configures
ALWAYS_FATAL_KINDS: frozenset[ErrorKind] = frozenset({ErrorKind.NOT_SUPPORTED})


@dataclass(frozen=True)
class ClassificationPolicy:
    """
    Allow-list of error kinds that trigger a retry.

    The default tolerates transient page state (missing/stale elements,
    windows not yet open) and treats everything else, including untagged
    errors from bugs in the query itself, as fatal.

    Attributes:
        retryable_kinds: Kinds that are swallowed and retried
    """

    retryable_kinds: frozenset[ErrorKind] = DEFAULT_RETRYABLE_KINDS

    def __post_init__(self) -> None:
        kinds = frozenset(ErrorKind(kind) for kind in self.retryable_kinds)
        object.__setattr__(self, "retryable_kinds", kinds - ALWAYS_FATAL_KINDS)

    @classmethod
    def default(cls) -> "ClassificationPolicy":
        return cls()

    @classmethod
    def permissive(cls) -> "ClassificationPolicy":
        """Retry every kind, including untagged errors, except NOT_SUPPORTED."""
        return cls(retryable_kinds=frozenset(ErrorKind))

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ClassificationPolicy":
        """
        Build the policy from RETRYABLE_ERROR_KINDS.

        Raises:
            ValueError: If a configured kind is not a known ErrorKind
        """
        return cls(retryable_kinds=kinds_from_names(settings.RETRYABLE_ERROR_KINDS))

    def widen(self, *kinds: ErrorKind) -> "ClassificationPolicy":
        """Return a policy that additionally retries `kinds`."""
        return ClassificationPolicy(retryable_kinds=self.retryable_kinds | frozenset(kinds))

    def narrow(self, *kinds: ErrorKind) -> "ClassificationPolicy":
        """Return a policy that no longer retries `kinds`."""
        return ClassificationPolicy(retryable_kinds=self.retryable_kinds - frozenset(kinds))

    def is_retryable(self, kind: ErrorKind) -> bool:
        return kind in self.retryable_kinds

    def classify(self, error: BaseException) -> Classification:
        """Classify a raised error by its kind tag."""
        kind = error_kind(error)
        if self.is_retryable(kind):
            return Classification.RETRYABLE
        return Classification.FATAL

    def describe(self) -> list[str]:
        """Sorted kind names, for logging."""
        return sorted(kind.value for kind in self.retryable_kinds)


def kinds_from_names(names: Iterable[str]) -> frozenset[ErrorKind]:
    """Parse kind names (as found in configuration) into ErrorKind values."""
    return frozenset(ErrorKind(name) for name in names)

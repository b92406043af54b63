"""
Per-query timing options.

Options travel with a query and may leave either field unset, in which case
the executor falls back to the configured defaults.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Options(BaseModel):
    """
    Timeout and retry interval for a query, in seconds.

    Both fields are immutable once constructed so they cannot drift during
    an execution. The retry interval must be positive: the executor always
    blocks between attempts and never polls back to back.
    """

    model_config = ConfigDict(frozen=True)

    timeout: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Maximum wall-clock time the executor may spend retrying",
    )
    retry_interval: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="Minimum pause between the starts of consecutive attempts",
    )

    def merge(self, other: Optional["Options"]) -> "Options":
        """Return options where fields set on `other` take precedence."""
        if other is None:
            return self
        return Options(
            timeout=other.timeout if other.timeout is not None else self.timeout,
            retry_interval=(
                other.retry_interval if other.retry_interval is not None else self.retry_interval
            ),
        )

"""
Vectorization result model.

A VectorResult is either OK (a vector of the configured dimension) or
DEGRADED (the provider failed). Degraded results never carry a vector:
a fabricated vector would rank arbitrarily against real ones.
"""

from pydantic import BaseModel, Field

from synapse.models.note import EmbeddingStatus


class VectorResult(BaseModel):
    """Outcome of vectorizing one text."""

    status: EmbeddingStatus
    vector: list[float] = Field(default_factory=list)
    reason: str | None = Field(default=None, description="Why the result is degraded")

    model_config = {"frozen": True}

    @classmethod
    def ok(cls, vector: list[float]) -> "VectorResult":
        return cls(status=EmbeddingStatus.OK, vector=list(vector))

    @classmethod
    def degraded(cls, reason: str) -> "VectorResult":
        return cls(status=EmbeddingStatus.DEGRADED, reason=reason)

    @property
    def is_degraded(self) -> bool:
        return self.status != EmbeddingStatus.OK

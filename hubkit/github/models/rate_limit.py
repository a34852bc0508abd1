"""Rate-limit snapshot model."""

from pydantic import BaseModel, ConfigDict

from ..core.constants import RATE_LIMIT_UNKNOWN


class APICalls(BaseModel):
    """Remaining and total API calls for the current token.

    A count that could not be read is ``-1``.
    """

    remaining: int = RATE_LIMIT_UNKNOWN
    limit: int = RATE_LIMIT_UNKNOWN

    model_config = ConfigDict(frozen=True)

    @property
    def known(self) -> bool:
        return self.remaining != RATE_LIMIT_UNKNOWN and self.limit != RATE_LIMIT_UNKNOWN

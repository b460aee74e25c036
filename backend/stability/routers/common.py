from fastapi import HTTPException

from ..errors import (
	DeliveryFailed,
	IncompleteResult,
	InvalidInput,
	InvalidWeights,
	MissingIndicator,
	SessionClosed,
	StabilityError,
	StoreUnavailable,
)

_STATUS = (
	(InvalidInput, 422),
	(InvalidWeights, 422),
	(MissingIndicator, 422),
	(IncompleteResult, 422),
	(SessionClosed, 409),
	(StoreUnavailable, 503),
	(DeliveryFailed, 502),
)


def http_error(exc: StabilityError) -> HTTPException:
	for kind, status in _STATUS:
		if isinstance(exc, kind):
			return HTTPException(status_code=status, detail=str(exc))
	return HTTPException(status_code=500, detail=str(exc))

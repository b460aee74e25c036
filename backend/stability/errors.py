"""Exceptions raised by the scoring engine and its collaborators.

Contract violations (``InvalidInput``, ``InvalidWeights``, ``MissingIndicator``,
``IncompleteResult``, ``SessionClosed``) point at a caller bug and are never
clamped or defaulted away. ``StoreUnavailable`` and ``DeliveryFailed`` wrap
failures of the record store and the report pipeline and are recoverable.
"""


class StabilityError(Exception):
	pass


class InvalidInput(StabilityError, ValueError):
	pass


class InvalidWeights(StabilityError, ValueError):
	pass


class MissingIndicator(StabilityError, KeyError):
	def __str__(self) -> str:
		# KeyError repr()s its message
		return str(self.args[0]) if self.args else "missing indicator"


class IncompleteResult(StabilityError, ValueError):
	pass


class SessionClosed(StabilityError):
	pass


class StoreUnavailable(StabilityError):
	pass


class DeliveryFailed(StabilityError):
	pass

"""Domain error hierarchy.  Every failure is raised before any state changes."""


class RideShareError(Exception):
    """Base class for all ride-share domain errors."""


class InvalidId(RideShareError, ValueError):
    """Raised when an id is absent, zero or negative."""


class InvalidVehicleId(RideShareError, ValueError):
    """Raised when a vehicle identification number is not 17 characters."""


class InvalidDriverStatus(RideShareError, ValueError):
    """Raised when a driver status is outside AVAILABLE / UNAVAILABLE."""


class InvalidTripReference(RideShareError, TypeError):
    """Raised when a non-Trip value is given where a Trip is expected."""


class DuplicatePartyId(RideShareError, ValueError):
    """Raised when two rider records or two driver records share an id."""


class InvalidTripData(RideShareError, ValueError):
    """Raised when trip times, cost or rating are inconsistent."""


class InvalidStateTransition(RideShareError):
    """Raised when a trip status change violates the state machine."""


class NoAvailableDrivers(RideShareError):
    """Raised when no eligible driver can take a trip request."""


class NotFound(RideShareError, LookupError):
    """Raised when a mutation targets a record that does not exist."""


class RiderNotFound(NotFound):
    """Raised when a trip is requested for an unknown rider."""


class TripNotFound(NotFound):
    """Raised when completing a trip id that does not exist."""


class UnknownPartyReference(RideShareError, LookupError):
    """Raised when an input record points at a rider or driver that does not exist."""

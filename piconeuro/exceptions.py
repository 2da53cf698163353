"""PicoNeuro-specific exception hierarchy."""


class PicoNeuroException(Exception):  # noqa: N818
    """Base class for all PicoNeuro-specific exceptions."""


class SignalArgumentError(PicoNeuroException, TypeError):
    """Raised when a combinator is built or subscribed with an invalid argument."""

    def __init__(self, combinator, message):
        """Initialize the exception.

        Args:
            combinator: The name of the combinator that rejected the argument.
            message: Description of the expected argument.
        """
        self.combinator = combinator
        super().__init__(f"{combinator}(): {message}")


class EmptyCombineError(PicoNeuroException, ValueError):
    """Raised when a combinator that joins signals receives no signals."""

    def __init__(self, combinator):
        """Initialize the exception.

        Args:
            combinator: The name of the combinator that received no inputs.
        """
        self.combinator = combinator
        super().__init__(f"{combinator}(): a list of signals is required")


class SignalTimeoutError(PicoNeuroException, TimeoutError):
    """Raised when a signal did not deliver an expected value in time."""

    def __init__(self, operation, timeout):
        """Initialize the exception.

        Args:
            operation: The consumption utility that was waiting.
            timeout: The number of seconds it waited.
        """
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation}() timed out after {timeout}s")


class NotSyncError(PicoNeuroException):
    """Raised when a subscription callback is invoked after its release."""

    def __init__(self, value):
        """Initialize the exception.

        Args:
            value: The value delivered after the subscription was released.
        """
        self.value = value
        super().__init__(
            f"signal is not synchronous, subscription invoked after release with {value!r}"
        )

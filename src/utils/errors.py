# error taxonomy shared by the ordering core and the db package


class OrderingError(Exception):
    """Base class for failures reported by the ordering core."""


class InvalidState(OrderingError):
    """
    A component was used out of protocol order, e.g. building a packaged item
    before binding one. Programming error, never retried.
    """


class EmptyCart(OrderingError):
    def __init__(self, message: str = "Cart is empty, nothing to order.") -> None:
        super().__init__(message)


class PersistenceFailure(OrderingError):
    """
    Header/line insert or transaction commit failed. The transaction has been
    rolled back by the time the caller sees this.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ResourceUnavailable(OrderingError):
    """The store could not be opened."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause

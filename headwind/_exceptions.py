__all__ = ("HeadwindError", "InvalidURL", "InvalidAuthority", "InvalidPort", "HandlerMismatch")


class HeadwindError(Exception): ...


class InvalidURL(HeadwindError, ValueError):
    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.value = value


class InvalidAuthority(InvalidURL): ...


class InvalidPort(InvalidAuthority): ...


class HandlerMismatch(HeadwindError): ...

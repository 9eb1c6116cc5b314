from __future__ import annotations


class DashboardError(Exception):
    """Base error; `user_message` is the only text that may reach a client."""

    user_message = "Something went wrong, please try again."

    def __init__(self, detail: str = "", *, user_message: str | None = None) -> None:
        super().__init__(detail or self.user_message)
        if user_message is not None:
            self.user_message = user_message


class UpstreamError(DashboardError):
    user_message = "The spreadsheet service could not be reached. Reload the page to retry."


class SheetConnectionError(UpstreamError):
    user_message = "Could not connect to the spreadsheet service."


class TabNotFoundError(UpstreamError):
    user_message = "The requested sheet is not available."


class FetchError(UpstreamError):
    user_message = "Loading data from the spreadsheet failed. Reload the page to retry."


class InvalidCredentials(DashboardError):
    user_message = "كلمة المرور غير صحيحة"


class NotAuthenticated(DashboardError):
    user_message = "Please log in first."

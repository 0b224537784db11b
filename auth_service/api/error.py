from fastapi import status
from libs.result import Error


class ClientError(Exception):
    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        clear_credentials: bool = False,
    ):
        self.base_error = base_error
        self.status_code = status_code
        # When set, the error response also expires both auth cookies
        self.clear_credentials = clear_credentials
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)

"""
All the exceptions raised when dealing with principals, subaccounts and account identifiers.
"""


class InvalidPrincipalText(ValueError):
    """Error while decoding a principal from its textual representation"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidSubaccount(ValueError):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidAccountIdentifier(ValueError):
    def __init__(self, message):
        super().__init__(message)
        self.message = message

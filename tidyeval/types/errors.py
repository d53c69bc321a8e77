
class TidyError(Exception):
    """ Base class for all tidyeval errors"""
    pass

class TidyInvalidSymbol(TidyError):
    """ Raised when an invalid symbol is used"""
    pass

class TidyUnboundSymbol(TidyError):
    """ Raised when a symbol is used before it is bound"""
    pass

class TidyArityError(TidyError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class TidyTypeError(TidyError):
    """ Raised when the types of arguments passed to a function are incorrect"""

class TidyInvalidDataSource(TidyError):
    """ Raised when overlay data is neither a named mapping, an environment nor absent"""

class TidyMissingName(TidyError):
    """ Raised when a dictionary pronoun has no binding for the requested name"""

    def __init__(self, name: str):
        super().__init__(f"Object '{name}' not found in pronoun")
        self.name = name

class TidyReadOnly(TidyError):
    """ Raised when writing through a read-only dictionary"""

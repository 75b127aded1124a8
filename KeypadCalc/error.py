


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

class CalculationError(MathError):
    pass

class NonFiniteResult(CalculationError):
    """Raised when a computed value is infinite or NaN (overflow, x/0, invalid domain)."""
    pass

class ConfigurationError(MathError):
    pass



# Fixed text shown on the display while the calculator is in the error state
ERROR_TOKENS = {
    "pt" : "Erro",
    "en" : "Error"
}

ERROR_TOKEN = ERROR_TOKENS["pt"]


def error_token(english=False):
    return ERROR_TOKENS["en"] if english else ERROR_TOKENS["pt"]



Error_Dictionary= {

    "1" : "Missing Files",
    "3" : "Calculator Error",
    "4" : "UI Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "1000" : "Required file missing: ", # + File name

    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3026" : "Number too big.",
    "3027" : "Invalid input for this function.",
    "3028" : "Result is not a number.",

    "4001" : "Clipboard does not contain a number: ", # + clipboard text

    "5001" : "Invalid setting value: ", # + key
    "5002" : "Settings could not be saved.",


    "9999" : "Unexpected Error: " #+error
}


def describe(error):
    """Return the user facing text for a MathError, e.g. 'Error 3003: Division by Zero'."""
    return f"Error {error.code}: {ERROR_MESSAGES.get(error.code, 'Unknown error')}"

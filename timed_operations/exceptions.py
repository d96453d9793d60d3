class MissingArgumentError(TypeError):
    """Exception raised when a required argument is None."""

    def __init__(self, argument_name):
        self.argument_name = argument_name
        super().__init__(f"Argument '{argument_name}' must not be None.")


class UnknownLevelError(ValueError):
    """Exception raised when a log level name cannot be resolved."""

    def __init__(self, level):
        self.level = level
        super().__init__(f"Unknown log level: {level!r}")

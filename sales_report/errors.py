class ReportValidationError(ValueError):
    """Input rejected before any report computation started."""


class StructuralValidationError(ReportValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid input data: {detail}")


class PolicyConfigurationError(ReportValidationError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid report policies: {detail}")

"""Shared error types for the layout intelligence core."""


class LayoutError(Exception):
    """Base error for all layout intelligence failures."""


class InvalidViewportError(LayoutError):
    """The viewport is missing or has unusable dimensions."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid viewport" + (f": {detail}" if detail else ""))


class UnknownElementError(LayoutError):
    """An operation referenced an element id that is not registered."""

    def __init__(self, element_id: str) -> None:
        self.element_id = element_id
        super().__init__(f"Unknown element: {element_id}")


class DuplicateElementError(LayoutError):
    """An element id was registered while already tracked."""

    def __init__(self, element_id: str) -> None:
        self.element_id = element_id
        super().__init__(f"Element already registered: {element_id}")


class ReentrantExecutionError(LayoutError):
    """A layout pass was triggered while another pass was still running."""

    def __init__(self) -> None:
        super().__init__("A layout pass is already in progress")


class ElementGeometryError(LayoutError):
    """Reading an element's geometry failed (e.g. a destroyed host object)."""

    def __init__(self, element_id: str, detail: str = "") -> None:
        self.element_id = element_id
        self.detail = detail
        super().__init__(
            f"Cannot read geometry of {element_id}" + (f": {detail}" if detail else "")
        )

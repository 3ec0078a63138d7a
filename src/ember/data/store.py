"""Typed, labeled store used to pass results between reconstruction tools.

Each reconstruction tool reads the elements it needs from the store (e.g. the
shower start position or the initial track) and writes its own outputs back
under configurable labels. An element which has not been computed yet is
simply absent, which tools check explicitly before using it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ember.utils.errors import MissingElementError

__all__ = ["Element", "ElementStore"]


@dataclass
class Element:
    """Value stored under a label, with its optional uncertainty.

    Attributes
    ----------
    value : object
        Value of the element
    error : object, optional
        Uncertainty on the value, if known
    """

    value: Any
    error: Optional[Any] = None

    @property
    def has_error(self):
        """Whether an uncertainty was provided with the value.

        Returns
        -------
        bool
            `True` if the error is set
        """
        return self.error is not None


class ElementStore:
    """Store of heterogeneous, labeled reconstruction elements.

    The type of an element is fixed by the first value stored under its label:
    storing a value of a different type under the same label later raises a
    `TypeError`, as it would otherwise silently change the meaning of the
    label for downstream tools.
    """

    def __init__(self):
        """Initialize an empty store."""
        self._elements: Dict[str, Element] = {}
        self._types: Dict[str, type] = {}

    def __contains__(self, label):
        """Whether an element is stored under a label."""
        return self.check_element(label)

    def __len__(self):
        """Number of elements in the store."""
        return len(self._elements)

    @property
    def labels(self):
        """List of labels currently holding an element.

        Returns
        -------
        List[str]
            Element labels
        """
        return list(self._elements.keys())

    def check_element(self, label: str) -> bool:
        """Checks whether an element was stored under a label.

        Parameters
        ----------
        label : str
            Element label

        Returns
        -------
        bool
            `True` if the element exists
        """
        return label in self._elements

    def check_error(self, label: str) -> bool:
        """Checks whether an element was stored with an uncertainty.

        Parameters
        ----------
        label : str
            Element label

        Returns
        -------
        bool
            `True` if the element exists and has an error
        """
        return label in self._elements and self._elements[label].has_error

    def get_element(self, label: str) -> Any:
        """Fetch the value of an element.

        Parameters
        ----------
        label : str
            Element label

        Returns
        -------
        object
            Element value
        """
        return self._get(label).value

    def get_error(self, label: str) -> Any:
        """Fetch the uncertainty of an element.

        Parameters
        ----------
        label : str
            Element label

        Returns
        -------
        object
            Element error, `None` if it was stored without one
        """
        return self._get(label).error

    def get_element_and_error(self, label: str) -> Tuple[Any, Any]:
        """Fetch the value and the uncertainty of an element.

        Parameters
        ----------
        label : str
            Element label

        Returns
        -------
        object
            Element value
        object
            Element error, `None` if it was stored without one
        """
        element = self._get(label)

        return element.value, element.error

    def set_element(self, value: Any, label: str, error: Optional[Any] = None):
        """Store an element (and optionally its uncertainty) under a label.

        Parameters
        ----------
        value : object
            Element value
        label : str
            Element label
        error : object, optional
            Uncertainty on the value
        """
        # Check that the type of the element is consistent with previous ones
        expected = self._types.setdefault(label, type(value))
        if not isinstance(value, expected):
            raise TypeError(
                f"Element '{label}' holds values of type {expected.__name__}, "
                f"cannot store a value of type {type(value).__name__}."
            )

        self._elements[label] = Element(value, error)

    def reset(self):
        """Remove all the elements from the store."""
        self._elements.clear()
        self._types.clear()

    def _get(self, label):
        """Fetch an element object, raise if it does not exist."""
        if label not in self._elements:
            raise MissingElementError(
                f"Element '{label}' is not set. Available elements: "
                f"{self.labels}"
            )

        return self._elements[label]

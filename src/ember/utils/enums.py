"""Enumerated types shared across the package."""

from enum import IntEnum

__all__ = ["enum_factory", "StatusEnum", "SignalTypeEnum"]


def enum_factory(enum, value):
    """Converts the name(s) of enumerated objects, as found in a
    configuration file, into the enumerated object(s) themselves.

    Names are case-insensitive.

    Parameters
    ----------
    enum : str
        Type of enumerated object (one of 'status', 'signal')
    value : Union[str, List[str]]
        Name or list of names

    Returns
    -------
    Union[IntEnum, List[IntEnum]]
        Enumerated object or list of enumerated objects
    """
    assert enum in ENUM_TYPES, (
        f"Unknown type of enumerated object: {enum}. Must be one of "
        f"{list(ENUM_TYPES)}."
    )
    enum_cls = ENUM_TYPES[enum]

    if not isinstance(value, str):
        return [enum_factory(enum, v) for v in value]

    try:
        return enum_cls[value.upper()]
    except KeyError as err:
        raise ValueError(
            f"Unknown {enum} value: {value}. Must be one of "
            f"{[e.name.lower() for e in enum_cls]}."
        ) from err


class StatusEnum(IntEnum):
    """Enumerates the possible outcomes of a reconstruction tool call.

    - SUCCESS: the outputs were computed and stored
    - FAILURE: recoverable failure, the caller must skip this candidate
    - FATAL: the pipeline is misconfigured, processing must stop
    """

    SUCCESS = 0
    FAILURE = 1
    FATAL = 2


class SignalTypeEnum(IntEnum):
    """Enumerates the types of signal a readout plane can produce."""

    INDUCTION = 0
    COLLECTION = 1


# Maps the configuration name of each enumerated type onto its class
ENUM_TYPES = {"status": StatusEnum, "signal": SignalTypeEnum}

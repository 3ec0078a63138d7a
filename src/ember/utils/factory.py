"""Contains functions needed to instantiate a class from a dictionary.

This allows to generically convert a YAML block into an instantiated class
with all the appropriate checks that the class exists and is provided
with appropriate arguments.
"""

from copy import deepcopy

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module):
    """Converts module into a dictionary which maps class names onto classes.

    Each class is registered under its class name and, if it defines one,
    under its short `name` attribute.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    classes = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name.startswith("_"):
            continue

        # Only consider classes which belong to the module of interest
        cls = getattr(module, cls_name)
        if not isinstance(cls, type) or cls.__module__ != module.__name__:
            continue

        classes[cls_name] = cls
        if getattr(cls, "name", None):
            classes[cls.name] = cls

    return classes


def instantiate(classes, cfg, **kwargs):
    """Instantiates a class based on a configuration dictionary and a list of
    possible classes to chose from.

    The configuration block is expected to look like:

    .. code-block:: yaml

        provider:
          name: class_name
          kwarg_1: value_1
          kwarg_2: value_2

    A bare string is interpreted as a class name with no argument.

    Parameters
    ----------
    classes : dict
        Dictionary which maps a class name onto an object class
    cfg : Union[str, dict]
        Configuration dictionary
    **kwargs : dict, optional
        Additional parameters to pass to the class constructor

    Returns
    -------
    object
        Instantiated object
    """
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    config = deepcopy(cfg)
    if "name" not in config:
        raise ValueError("Could not find the name of the class under `name`.")

    class_name = config.pop("name")
    if class_name not in classes:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps names "
            f"to classes. Available names: {list(classes.keys())}"
        )

    # Parameters provided by the caller must not be duplicated in the config
    for key in kwargs:
        assert key not in config, (
            f"The keyword argument {key} is provided both in the configuration "
            "and by the caller. Ambiguous."
        )
    config.update(kwargs)

    cls = classes[class_name]
    try:
        return cls(**config)

    except Exception as err:
        logger.error(
            "Failed to instantiate %s with these arguments:\n  - kwargs: %s",
            cls.__name__,
            config,
        )

        raise err

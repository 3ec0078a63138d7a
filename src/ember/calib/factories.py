"""Construct space charge providers from their configuration."""

import numpy as np

from ember.utils.factory import instantiate, module_dict

from . import space_charge

__all__ = ["sce_factory"]

# Build a dictionary of available space charge providers
SCE_DICT = module_dict(space_charge)


def sce_factory(cfg, geo=None):
    """Instantiates a space charge provider from a configuration dictionary.

    Parameters
    ----------
    cfg : Union[str, dict]
        Space charge provider configuration
    geo : Geometry, optional
        Detector geometry. If provided, the nominal field direction of each
        TPC is set to its drift direction.

    Returns
    -------
    SpaceChargeBase
         Initialized space charge provider
    """
    kwargs = {}
    if geo is not None and (isinstance(cfg, str) or "efield_dirs" not in cfg):
        kwargs["efield_dirs"] = np.vstack([c.drift_dir for c in geo.chambers])

    return instantiate(SCE_DICT, cfg, **kwargs)

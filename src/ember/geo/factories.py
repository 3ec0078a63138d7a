"""Construct a geometry class from a detector name or a configuration."""

from pathlib import Path
from typing import Dict, Optional

import yaml

from .base import Geometry
from .properties import DetectorProperties

# Get config directory relative to this module
GEO_CONFIG_DIR = Path(__file__).parent / "config"

__all__ = ["geo_factory", "detprop_factory"]


def geo_dict() -> Dict[Path, Dict[str, str]]:
    """Builds a dictionary of available geometry configurations.

    Returns
    -------
    dict
        Maps each geometry file path onto its name and tag
    """
    options = {}
    for path in sorted(GEO_CONFIG_DIR.glob("*/*_geometry.yaml")):
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)

        options[path] = {"name": cfg["name"], "tag": cfg.get("tag", None)}

    return options


def geo_factory(detector: str, tag: Optional[str] = None) -> Geometry:
    """Instantiates a geometry from the name of a detector shipped with the
    package or from the path to a geometry YAML file.

    Parameters
    ----------
    detector : str
        Name of the detector (e.g. "toy") or path to a geometry file
    tag : str, optional
        Geometry tag. If not specified, the first geometry found for the
        detector is loaded.

    Returns
    -------
    Geometry
         Initialized geometry object
    """
    # If a path to a file is provided, load it directly
    if Path(detector).suffix in (".yaml", ".yml"):
        file_path = Path(detector)
        if not file_path.is_file():
            raise FileNotFoundError(f"Geometry file not found: {detector}")

    else:
        matches = [
            (path, cfg["tag"])
            for path, cfg in geo_dict().items()
            if cfg["name"].lower() == detector.lower()
        ]
        if not len(matches):
            raise ValueError(f"No geometry found for detector '{detector}'.")

        if tag is not None:
            tags = [t for _, t in matches]
            if tag not in tags:
                raise ValueError(
                    f"No geometry found for detector '{detector}' with tag "
                    f"'{tag}'. Available tags are: {set(tags)}"
                )
            file_path = matches[tags.index(tag)][0]
        else:
            file_path = matches[0][0]

    with open(file_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    return Geometry(**cfg)


def detprop_factory(cfg: Optional[dict] = None) -> DetectorProperties:
    """Instantiates detector properties from a configuration block.

    Parameters
    ----------
    cfg : dict, optional
        Detector properties configuration. Uses defaults if not provided.

    Returns
    -------
    DetectorProperties
        Detector properties object
    """
    return DetectorProperties(**(cfg or {}))

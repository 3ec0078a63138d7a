"""Grouping of hits which were fitted on the same readout snippet."""

from typing import Dict, List, Sequence

from ember.data import Hit

__all__ = ["organize_hits"]


def organize_hits(hits: Sequence[Hit]) -> Dict[Hit, List[Hit]]:
    """Groups hits which share a readout snippet and picks one primary hit
    per snippet.

    Two hits belong to the same snippet if they are on the same plane and
    share the same start tick, end tick and wire. The hit with the largest
    charge integral in a snippet is its primary hit, all the others are its
    secondary hits. When a hit with a larger integral is found later in the
    input, it takes over as the primary and the former primary is appended to
    the secondary hits.

    Parameters
    ----------
    hits : Sequence[Hit]
        Hits spanning any number of planes

    Returns
    -------
    Dict[Hit, List[Hit]]
        Maps each primary hit onto its (possibly empty) list of secondary
        hits, ordered by plane, then by snippet discovery order
    """
    # For each plane, map each snippet onto [primary, secondaries]
    snippets = {}
    for hit in hits:
        plane_snippets = snippets.setdefault(hit.plane_id, {})
        group = plane_snippets.get(hit.snippet)
        if group is None:
            plane_snippets[hit.snippet] = [hit, []]
        elif hit.integral > group[0].integral:
            group[1].append(group[0])
            group[0] = hit
        else:
            group[1].append(hit)

    result = {}
    for plane_id in sorted(snippets):
        for primary, secondaries in snippets[plane_id].values():
            result[primary] = secondaries

    return result

"""Map narration progress offsets back to word indices.

Engines report character offsets relative to the slice they were given.
Every signal is resolved against the full segmentation on its own, so
skipped or out-of-order signals never compound.
"""

from __future__ import annotations

from bisect import bisect_left

from playstream.core.models import Segmentation


def advance(progress_offset: int, segmentation: Segmentation, slice_start_index: int) -> int:
    """Resolve a slice-relative character offset to an absolute word index.

    The absolute offset is ``progress_offset`` plus the start of the token the
    slice begins at. The result is the first token starting at or after that
    offset, or the last token when the offset lies past every token start.

    Raises:
        IndexError: If the segmentation is empty or slice_start_index is out of range.
    """
    if not 0 <= slice_start_index < len(segmentation):
        raise IndexError(
            f"Slice start {slice_start_index} out of range for {len(segmentation)} tokens"
        )

    absolute = segmentation[slice_start_index].start + max(progress_offset, 0)
    return min(bisect_left(segmentation.starts, absolute), segmentation.last_index)

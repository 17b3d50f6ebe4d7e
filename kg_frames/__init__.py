"""Convert FRIES frame documents (entities, events, sentences) into relation documents.

Convenience entry points:
 - `convert_parts(doc_id, parts)` -> {'docId', 'events'}
 - `build_frame_graph(entities, events, sentences)`
 - `annotate_site(text)`

Related CLI: `python -m kg_frames.run <directory>`
"""

from .assemble import assemble_document, convert_parts  # noqa: F401
from .frames import FrameGraph, build_frame_graph  # noqa: F401
from .sites import SiteInfo, annotate_site  # noqa: F401
from .transform import transform_event  # noqa: F401

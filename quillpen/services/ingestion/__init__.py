"""Batch ingestion of raw markdown into the writing corpus.

Pipeline stages per file: **decode -> extract -> name -> write -> delete**.

1. **Decode** (quillpen/services/frontmatter.py) -- Splits each source file
   into frontmatter and body.  Files that already carry a ``title`` are
   skipped untouched.

2. **Extract** (metadata_extractor.py / MetadataExtractor) -- One LLM
   completion per file derives title, date, tags and summary.

3. **Name** (filename_assigner.py) -- ``<date>_<slug>.md`` in the run's
   destination directory, with a numeric suffix on collision.

4. **Write / delete** (ingestion_service.py / IngestionService) -- Writes
   the destination document, then removes the source.
"""

from quillpen.services.ingestion.filename_assigner import assign_filename, resolve_destination
from quillpen.services.ingestion.ingestion_service import IngestionService
from quillpen.services.ingestion.metadata_extractor import MetadataExtractor

__all__ = [
    "IngestionService",
    "MetadataExtractor",
    "assign_filename",
    "resolve_destination",
]

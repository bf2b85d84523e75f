"""Generation commands over the writing corpus.

- writing_service.py (WritingService) -- draft, review, refine and ship
- style_analyzer.py (StyleAnalyzer) -- style guide from published content
- style_guide.py -- reads the style guide into prompts
- cleanup.py -- lists and deletes files in ``writing/drafts/``
"""

from quillpen.services.writing.cleanup import delete_files, list_draft_files
from quillpen.services.writing.style_analyzer import StyleAnalyzer
from quillpen.services.writing.writing_service import WritingService, latest_draft

__all__ = [
    "StyleAnalyzer",
    "WritingService",
    "delete_files",
    "latest_draft",
    "list_draft_files",
]

"""Command-line interface for quillpen.

Subcommands (one module each, registered in :mod:`quillpen.cli.main`):

- ``quillpen init`` -- create the workspace skeleton and ``.quillpen/config.yaml``
- ``quillpen ingest`` -- move raw markdown into the corpus with extracted metadata
- ``quillpen draft`` -- turn notes into a structured draft
- ``quillpen review`` -- editorial feedback on a draft
- ``quillpen refine`` -- an improved copy of a draft, applying review feedback
- ``quillpen ship`` -- finalize a draft, or write promotional posts for a blog post
- ``quillpen analyze`` -- derive a style guide from published content
- ``quillpen clean`` -- empty ``writing/drafts/``

Heavy imports (LLM SDKs) are deferred inside the handlers so that simple
commands start fast.
"""

"""Core logic for the Frontmatter Infobox.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- flatten nested frontmatter into separator-joined paths
- write edited values back into the nested structure
- parse and render markdown documents with YAML frontmatter
- build the table/gallery model shown in the panel
"""

"""THILO static site: CMS content mapping, markdown rendering and theme."""

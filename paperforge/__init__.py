"""
PAPERFORGE - Journal submission preparation for LaTeX manuscripts

Finds a LaTeX starting point for a target journal, materializes it into a
working project, and validates and packages the project for submission.

Architecture:
- Templating Context: Template discovery, caching, paper extraction, project setup
- Submission Context: Compilation, journal compliance, packaging and checklists
"""

__version__ = "0.1.0"

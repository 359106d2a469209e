"""
CVTAILOR - CV Assembly from Tailored AI Output

The rendering core of a job-application assistant. AI-generated Markdown is
split into canonical sections and bound onto fixed-slot HTML templates, with
fallbacks that keep mandatory sections populated.

Architecture:
- Intake Context: Job posting analysis (language detection)
- Templating Context: Section parsing, markup conversion, template binding
"""

__version__ = "0.1.0"

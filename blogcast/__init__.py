"""
blogcast

Turns uploaded audio/video recordings into Markdown blog posts using the
Gemini generative API for both transcription and writing.

Packages:
    - llm/: Gemini client, retry policy, response parsing, errors
    - transcription/: MIME detection, media download, transcription workflow
    - blog/: blog post generation from transcripts
    - posts/: persistence collaborator interface
    - prompts/: YAML prompt templates rendered with Jinja2
    - utils/: logging configuration

Modules:
    - config.py: AppConfig, the YAML + environment configuration root
    - orchestrator.py: ContentOrchestrator tying the workflows to storage
"""

__version__ = "0.3.0"

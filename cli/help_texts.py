"""
Centralized Help Text Constants

CLI help text constants for commands and options, shared by the
subcommand modules.
"""

# Exit codes for different error types
class ExitCodes:
    SUCCESS = 0
    GENERAL_ERROR = 1


# Command help texts
TRANSCRIBE_HELP = "Transcribe an uploaded audio or video file with Gemini."
GENERATE_HELP = "Generate a Markdown blog post from a transcript, in the style of earlier posts."

# Option help texts - Transcribe command
TRANSCRIBE_URL_HELP = "URL of the uploaded file. The file is downloaded and sent to Gemini inline (20MB limit)."

TRANSCRIBE_FILE_NAME_HELP = (
    "Original file name, used to detect the media type from its extension "
    "(.mp3, .wav, .m4a, .mp4, .mov, ...). Defaults to the last segment of the URL."
)

TRANSCRIBE_OUTPUT_HELP = "Write the transcript to this file instead of standard output."

# Option help texts - Generate command
GENERATE_TRANSCRIPT_HELP = "Path to a plain-text transcript file."

GENERATE_PRIOR_POST_HELP = (
    "Markdown file of an earlier post used as a style reference. "
    "Repeat for several posts, newest first; only the first three are used."
)

GENERATE_OUTPUT_HELP = "Write the generated Markdown to this file instead of standard output."

# Shared option help texts
USER_ID_HELP = "User the transcript or post belongs to."
CONFIG_HELP = "Path to configuration file (default: .blogcast/config.yaml)."
LOG_LEVEL_HELP = "Logging level (overrides the config file)."

"""openclaw: chat-driven growth automation assistant.

Messages arrive over Telegram, go to one configured text-generation backend
(OpenAI-compatible, Anthropic or Gemini), and the parsed results land in a
Google Sheets record store or on GitHub Pages.
"""

__version__ = "0.1.0"

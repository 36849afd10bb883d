"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Compose the instruction sent to the model from the prompt and candidate foods.
- Call Groq and surface transport failures as a single recoverable error.
- Parse the model's free-form reply into untrusted answer entries.
"""

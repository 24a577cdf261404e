"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build prompts from a search query and its smart-match candidates.
- Ask the Groq LLM why each candidate may be the item the user is after.
- Graceful fallback when the LLM is unavailable or returns invalid output.
"""

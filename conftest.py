"""Global pytest configuration."""

import os

# Never reach a real provider from tests, whatever the developer's shell has set
os.environ["DOCQA_OPENAI_API_KEY"] = ""
os.environ.setdefault("DOCQA_LOG_LEVEL", "WARNING")

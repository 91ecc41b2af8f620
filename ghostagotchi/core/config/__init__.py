"""
Configuration subsystem for Ghostagotchi.

Static configuration only: values come from environment variables (with
``.env`` support) and are validated once at startup.

Usage
-----
```python
from ghostagotchi.core.config import Config

timeout = Config.CHAT_TIMEOUT_SECONDS
```
"""

from ghostagotchi.core.config.config import Config, Environment

__all__ = ["Config", "Environment"]

"""
Agents package for the proposal outline studio.

Both remote-model collaborators live here:

```python
from agents import OutlineGenerator, Summarizer

cleaned = await Summarizer().summarize(description)
response = await OutlineGenerator().generate(cleaned)
```
"""

from .outline_agent import OutlineGenerator  # noqa: F401
from .summarizer_agent import Summarizer  # noqa: F401

__all__ = ["OutlineGenerator", "Summarizer"]

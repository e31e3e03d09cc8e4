"""Event classification engine.

- `penetration`: deepest layer reached contiguously by the incoming muon
- `decay`: upward decay search and downward decay strategies
- `afterpulse`: through-going afterpulse search and improved strategies
- `classifier`: :class:`EventClassifier`, which drives all of the above
  over the time samples of an event and feeds an observation sink

**Example Configuration:**
```yaml
classify:
  decay_down: adjacent
  afterpulse_improved: isolated
```
"""

from .afterpulse import find_afterpulse_simple
from .classifier import EventClassifier
from .decay import find_upward_decay
from .factories import afterpulse_locator_factory, decay_locator_factory
from .penetration import determine_penetration

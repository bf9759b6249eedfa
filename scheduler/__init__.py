"""
scheduler
---------

Main scheduling module. Initializes key components:

- `builder`: The `generate` entry point (validation, best-of selection).
- `runner`: One full simulation attempt over the month.

Supporting modules: `roommates`, `day_order`, `evaluator`, `slot_filler`,
`solver` (best-of retry selection) and `extractor` (tabular views of results).
"""
from . import builder, runner

"""Top‑level package for Angler Finance.

Record keeping for hobby fishing trips and gear purchases.  The primary
modules are:

* ``analytics`` – statistics and aggregation over trip records
* ``budgets`` – budget and income-goal progress
* ``export`` – CSV and PDF export of trips
* ``formatting`` – currency formatting shared by every display path
* ``db`` – the SQLite record store

To export the stored trips from the command line you can execute:

```bash
python scripts/export_trips.py --format csv
```
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import budgets  # noqa: F401  # re-exported for convenience
from . import export  # noqa: F401  # re-exported for convenience
from . import formatting  # noqa: F401  # re-exported for convenience
from .models import BudgetSettings, GearItem, MonthlyBucket, Trip  # noqa: F401


__all__ = [
    "analytics",
    "budgets",
    "export",
    "formatting",
    "BudgetSettings",
    "GearItem",
    "MonthlyBucket",
    "Trip",
]

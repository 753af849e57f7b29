"""TrackProfit.

Analytics backend for cash-on-delivery e-commerce operations. It stores daily
ad spend, sales, profit and financial tracking rows per user, derives marketing
KPIs (CPL, CPD, delivery rate, ROI, net profit) from them, archives closed months
and produces AI-written narrative summaries.

Packages
--------

* ``trackprofit.analytics`` - pure KPI arithmetic over tracking rows.
* ``trackprofit.security`` - rate limiting, CSRF token bookkeeping and input sanitization.
* ``trackprofit.llm`` - the language-model wrapper used for insights, alerts and chat.
* ``trackprofit.core`` - logging, monitoring, errors and the database layer.
* ``trackprofit.server`` - the FastAPI application, routers and services.
"""

__version__ = "1.0.0"

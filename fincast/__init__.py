"""
FinCast - Financial Projection & Debt-Strategy Engine

Stateless calculations for personal-finance planning: next-month cashflow
forecasts, progressive tax estimates, debt payoff ordering and progress
tracking, all in Decimal money.

Modules
-------
- frequency    : Pay-frequency normalization to monthly/annual equivalents
- income       : Income sources and diversification scoring
- cashflow     : Transaction aggregation, trend projection, savings rate
- tax          : Bracket marching, effective/marginal rates, hints
- brackets     : Bundled bracket tables and standard deductions
- amortization : Months-to-payoff closed form
- debt         : Strategy ranking, progress, milestones, debt-free date
- repayment    : Rolling repayment simulation and strategy comparison
- utils        : Shared utilities (coercion, rounding, calendar helpers)

"""

from .cashflow import forecast
from .debt import Debt, Strategy, portfolio_summary, rank
from .income import IncomeSource
from .tax import TaxBracket, calculate
from . import utils

"""
Shared numeric constants for the payoff engine.
Every projection routine reads its thresholds from here so the month cap and
paid-off tolerance stay consistent across calculators.
"""

# Projections stop after 50 years; a debt still open at the cap never pays off.
MAX_PROJECTION_MONTHS = 600

# Balances at or below this amount are treated as fully paid.
PAID_OFF_THRESHOLD = 0.01

# An APR of exactly 1.2 marks 0-0-12 style installment products billed at 0%.
ZERO_INTEREST_SENTINEL_APR = 1.2

# Smart strategy: debts at or above this APR are attacked first.
DEFAULT_SMART_THRESHOLD = 5.0

# Rate solver (Newton-Raphson)
RATE_SOLVER_INITIAL_GUESS = 0.01  # 1% monthly
RATE_SOLVER_TOLERANCE = 1e-8
RATE_SOLVER_MAX_ITERATIONS = 100
RATE_SOLVER_FLOOR = 0.001
RATE_SOLVER_CEILING = 1.0
RATE_SOLVER_MIN_DERIVATIVE = 1e-12

# Payment solver
PAYMENT_SOLVER_EPSILON = 1e-10

# Overview flags
NEAR_PAYOFF_MONTHS = 6
HIGH_INTEREST_APR = 30.0

# Average periods per month used to normalize income and expenses
FREQUENCY_MONTHLY_FACTORS = {
    "monthly": 1.0,
    "weekly": 4.33,
    "biweekly": 2.17,
    "yearly": 1.0 / 12.0,
}

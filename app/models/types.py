"""
Standard type definitions for database models.

Provides consistent types for monetary fields across all models.
"""

from sqlalchemy import DECIMAL

# Standard money type for amounts, balances, earnings
# Precision: 18 digits total, 2 after decimal point
# Suitable for: PKR amounts
MoneyType = DECIMAL(18, 2)

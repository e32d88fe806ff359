"""
Test suite for the token ledger actor.

Focus areas:
- Supply conservation and non-negative balances
- Allowance gating with zero mutation on rejection
- Transaction dedup windows and lazy expiry
- Admin-only operations
- Actor lifecycle, fatal conditions and the query channel
"""

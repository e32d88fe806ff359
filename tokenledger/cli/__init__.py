"""
tokenledger CLI

Commands:
- tokenledger run - Feed a JSONL message script through a token actor
- tokenledger actor-id - Derive deterministic actor ids from names
- tokenledger version - Show version information
"""

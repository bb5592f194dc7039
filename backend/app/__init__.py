"""
Gebeta Backend: Application Package
===================================

REST backend for campus food discovery.

    ┌─────────────────────────────────────┐
    │   HTTP core (Router, body, writer)  │  ← app/http
    ├─────────────────────────────────────┤
    │         Routes (handlers)           │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (business rules)       │  ← slugs, ratings, approvals
    ├─────────────────────────────────────┤
    │  Models (SQLAlchemy) & Schemas      │  ← tables / wire contracts
    ├─────────────────────────────────────┤
    │   Database (async sessions)         │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"

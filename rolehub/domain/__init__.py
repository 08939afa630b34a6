"""Domain model, policies and ports for roles.

This package contains logic that defines *what* the business rules are,
independent from *where* they are applied (services, repositories, etc.).
"""

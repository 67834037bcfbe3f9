"""
Codekeeper - Event Session Access Codes

Issues short-lived numeric access codes for event sessions and validates
presented codes against every live session.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- session: In-memory session registry
- codes: TTL-backed code store and code generation
- lifecycle: Start/rotate/validate/stop orchestration
- storage: Redis connection management
- config: Environment configuration
- api: HTTP request/response models
"""

__version__ = "1.0.0"

"""
LeakHunter - Offline Secret Scanner

A local-first scanner that finds leaked credentials before they reach git:
- Bot and platform tokens (Discord, Telegram, GitHub)
- Generic API keys and hardcoded credentials
- Sensitive files (.env, key files, database dumps, backups)
- Risky code (hardcoded JWT secrets, backdoor routes, mass deletion)

Every finding comes with a risk score and remediation guidance.
"""

__version__ = "1.0.0"


__all__ = [
    "__version__",
]

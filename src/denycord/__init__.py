"""
Denycord - Denylist Discord Moderation Bot

Denycord deletes Discord messages that match a denylist of regular expressions
loaded from a plain-text file. The file is watched while the bot runs and every
change is picked up without a restart.

Core Components:

- **Denylist Engine**: Compiles one case-insensitive pattern per line, keeps the
  last good set of rules when a reload produces none, and reloads on file changes
- **Message Evaluation**: Pure decision function over a message and a denylist
  snapshot, with declarative exemptions for specific channels
- **Moderation Actions**: Message deletion followed by a structured audit log entry
  with the author's account age and the matched pattern

Usage:
    from denycord.main import main
    main()  # Starts the bot
"""

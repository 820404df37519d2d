"""
Discord integration for Denycord.

- **cogs/events_listener.py**: Bot lifecycle (on_ready) logging and a presence that
  shows how many denylist rules are active.

- **cogs/message_listener.py**: Converts each new message into an InboundMessage,
  evaluates it against the current denylist snapshot and deletes it on a match.
"""

"""
Data types for Denycord.

- **discord_datatypes.py**: Typed wrappers around Discord snowflake IDs, including
  decoding of the creation timestamp embedded in each ID.

- **moderation_datatypes.py**: Rules, normalized inbound messages, moderation
  decisions and audit records passed between the denylist components.
"""

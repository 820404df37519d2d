"""
Cogs package for Denycord.
Each module defines a cog class and a setup function to register it with the bot.
The cogs are loaded explicitly in main.py, which passes them the shared denylist store.
"""

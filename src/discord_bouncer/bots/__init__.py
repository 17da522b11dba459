"""
Discord bot implementation for the bouncer.

- bot_core: assembles the bot, its engine components and commands
- handlers: Discord event handlers
- commands: setup command handlers
"""

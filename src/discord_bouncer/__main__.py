from discord_bouncer.bots.bot_core import run

if __name__ == "__main__":
    run()

from podrun.cli import cli_app

if __name__ == "__main__":
    cli_app(prog_name="podrun")

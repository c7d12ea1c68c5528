from crux_release.cli import cli

if __name__ == "__main__":
    cli(prog_name="crux-release")

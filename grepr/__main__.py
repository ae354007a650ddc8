from grepr.main import run_cli

run_cli()

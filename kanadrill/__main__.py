from kanadrill.cli.main import main

main()

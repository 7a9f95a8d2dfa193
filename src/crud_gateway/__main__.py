from crud_gateway.cli import main

main()

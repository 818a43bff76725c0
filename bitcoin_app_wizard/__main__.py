from bitcoin_app_wizard.cli import main

main()

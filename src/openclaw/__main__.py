from openclaw.bot import main

main()

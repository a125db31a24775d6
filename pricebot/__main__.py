from pricebot.main import main

main()

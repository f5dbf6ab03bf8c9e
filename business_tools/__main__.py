from business_tools.main import run

run()

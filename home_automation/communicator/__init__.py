# home_automation/communicator/__init__.py

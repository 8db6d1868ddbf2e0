"""Campus life assistant: accounts, course timetable, tasks, a message board and a command line."""

__version__ = "1.0.0"
"""
clipapp
Command line shell of clipkeeper: browse, search and manage the clipboard history,
and run captures through the history and its transforms.
"""

"""
coursecal – course schedule rows to a recurring-event iCalendar file.
"""

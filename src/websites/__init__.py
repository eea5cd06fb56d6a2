"""
Websites bounded context: slug allocation and the draft/publish lifecycle of
nonprofit website records.
"""

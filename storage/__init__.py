"""
storage/ - Persistence Gateway
==============================
File-level persistence for the repositories: the CSV row codec, the
whole-collection snapshot codec and the plain text writer.
This layer is the lowest in the architecture and only knows about models.
"""

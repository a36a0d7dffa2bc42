"""
coursemgr – keeps a "current course" symlink into a tree of semester/course folders.
"""

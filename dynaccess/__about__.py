__version__ = "0.3.0"
__author__ = "dynaccess maintainers"
__author_email__ = "dynaccess@users.noreply.github.com"

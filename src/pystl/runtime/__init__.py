from pystl.runtime.escape import escape_html
from pystl.runtime.helpers import iterate, output

__all__ = ["escape_html", "iterate", "output"]

"""
node/fetch
"""

from ..js.common import NodeFiles
from ..js.fetch import FetchPlugin


class NodeFetchPlugin(FetchPlugin):
    """Renders a snippet for the global ``fetch`` of Node.js 18+."""

    target = "node"
    client = "fetch"
    title = "fetch"
    link = "https://nodejs.org/api/globals.html#fetch"

    file_source = NodeFiles

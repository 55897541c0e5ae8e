"""
node/axios
"""

from ..js.axios import AxiosPlugin
from ..js.common import NodeFiles


class NodeAxiosPlugin(AxiosPlugin):
    target = "node"
    client = "axios"
    title = "Axios"

    file_source = NodeFiles

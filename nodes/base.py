"""
base.py - MonitoredNode 基类

所有流水线节点的基类：在节点执行前后把 running / completed / failed
状态写入 shared["monitor"]，失败时异常照常向上抛出。
"""

from pocketflow import Node

from utils.monitor import update_status


class MonitoredNode(Node):
    """
    带执行状态记录的同步节点

    只包装 pocketflow 的 _run，prep/exec/post 与重试语义保持不变。
    """

    def _run(self, shared):
        node_name = type(self).__name__
        update_status(shared, node_name=node_name, status="running")
        try:
            action = super()._run(shared)
        except Exception as e:
            update_status(shared, node_name=node_name, status="failed", error=str(e))
            raise
        update_status(
            shared,
            node_name=node_name,
            status="completed",
            extra={"action": action or "default"},
        )
        return action

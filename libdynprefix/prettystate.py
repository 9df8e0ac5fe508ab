# SPDX-License-Identifier: LGPL-2.1-or-later

from collections import OrderedDict
import json

import yaml

from libdynprefix.schema import LoadPool


class PrettyRequest:
    """
    Render a load-pool request body as YAML or JSON, pools sorted by name
    and `addrs` first inside each pool.
    """

    def __init__(self, request):
        yaml.add_representer(OrderedDict, represent_ordereddict)
        self.request = order_request(request)

    @property
    def yaml(self):
        return yaml.dump(
            self.request, default_flow_style=False, explicit_start=True
        )

    @property
    def json(self):
        return json.dumps(self.request, indent=4, separators=(",", ": "))


def represent_ordereddict(dumper, data):
    """
    Represent OrderedDict as regular dictionary

    Source: https://stackoverflow.com/questions/16782112/can-pyyaml-dump-dict-items-in-non-alphabetical-order
    """  # noqa: E501
    value = []

    for item_key, item_value in data.items():
        node_key = dumper.represent_data(item_key)
        node_value = dumper.represent_data(item_value)

        value.append((node_key, node_value))

    return yaml.nodes.MappingNode("tag:yaml.org,2002:map", value)


def order_request(request):
    ordered_request = OrderedDict()
    for pool_name in sorted(request):
        ordered_request[pool_name] = order_pool(request[pool_name])
    return ordered_request


def order_pool(pool):
    ordered_pool = OrderedDict()
    if LoadPool.ADDRS in pool:
        ordered_pool[LoadPool.ADDRS] = pool[LoadPool.ADDRS]

    for key, value in sorted(pool.items()):
        if key != LoadPool.ADDRS:
            ordered_pool[key] = value

    return ordered_pool

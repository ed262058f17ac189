from dataclasses import dataclass
from typing import Optional

from graphlettools.io.graph6 import g6_to_adjacency
from graphlettools.fglt.pipeline import compute
from graphlettools.utils.naming import orbit_name


@dataclass
class GDVOptions:
    workers: Optional[int] = 1
    vertex: int = 0


if __name__ == "__main__":
    g6 = "DsC"  # replace
    opts = GDVOptions(workers=1, vertex=0)

    adj = g6_to_adjacency(g6)
    res = compute(adj, workers=opts.workers)
    print("g6:", g6, adj)
    for o, value in enumerate(res.net[:, opts.vertex]):
        print(f"  {orbit_name(o):<24} {int(value)}")

#!/usr/bin/env python3
"""Turn a bare XYZ trajectory into a PDB trajectory with bonds, residues and a cell.

Usage:
    python examples/wrap_xyz_trajectory.py md.xyz --topology first.pdb --box 30 30 30 --out md.pdb

    # Keep only every 10th step:
    python examples/wrap_xyz_trajectory.py md.xyz --topology first.pdb --stride 10 --out md.pdb.gz
"""

from __future__ import annotations

import argparse
import logging

from tqdm import tqdm

from moltraj import Trajectory, UnitCell

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
logger = logging.getLogger(__name__)


def main() -> None:
    p = argparse.ArgumentParser(description="Attach a topology and unit cell to an XYZ trajectory")
    p.add_argument("xyz", help="Input XYZ trajectory")
    p.add_argument("--topology", required=True, help="PDB file whose first step provides the topology")
    p.add_argument("--box", type=float, nargs=3, default=None, help="Orthorhombic box lengths a b c")
    p.add_argument("--stride", type=int, default=1, help="Write one step out of every N")
    p.add_argument("--out", required=True, help="Output trajectory (.pdb or .pdb.gz)")
    args = p.parse_args()

    written = 0
    with Trajectory(args.xyz) as src, Trajectory(args.out, "w") as dst:
        src.set_topology(args.topology)
        if args.box:
            src.set_cell(UnitCell(*args.box))
        total = src.nsteps
        for step in tqdm(range(total), desc="wrap", unit="step"):
            frame = src.read()
            if step % args.stride == 0:
                dst.write(frame)
                written += 1

    logger.info("Wrote %d of %d steps to %s", written, total, args.out)


if __name__ == "__main__":
    main()

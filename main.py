#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  KINESO — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete demo pipeline:
    1. Parameter parsing (demo defaults, optional key=value overrides)
    2. Trajectory generation + results table
    3. Differentiator / integrator validation against the analytic solution
    4. Edit propagation — one drag per series, with consistency report
    5. CSV export
    6. Charts (motion, series panel, edit comparisons, dashboard)

  All outputs saved to outputs/ directory.

  Usage:
    python main.py                     # Run everything
    python main.py --quick             # Skip chart rendering
    python main.py --no-drag           # Run without drag support
    python main.py v0=3 a=-1 t1=6      # Override parameters
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import os
import time

from kineso.errors import KinematicsError
from kineso.export import format_table, format_readout, write_csv
from kineso.session import KinematicsSession
from kineso.validation import run_all_validations, consistency_report
from kineso.visualization import (
    plot_motion, plot_series, plot_edit_comparison, plot_dashboard,
    ensure_output_dir,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     KINESO — CONSTANT-ACCELERATION KINEMATICS                         ║
║     ─────────────────────────────────────────────────────             ║
║     x(t) · v(t) · a(t) │ finite differences · trapezoid · Euler       ║
║     Editable trajectories with consistent re-derivation               ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def resolve_drag_support(argv) -> bool:
    """Decided once at startup and handed to the session."""
    return '--no-drag' not in argv


def parse_overrides(argv) -> dict:
    """Collect ``key=value`` arguments as raw form values."""
    form = {'v0': '5', 'a': '2', 't1': '10'}
    for arg in argv:
        if '=' in arg and not arg.startswith('-'):
            key, value = arg.split('=', 1)
            form[key.strip()] = value.strip()
    return form


def main():
    start_time = time.time()
    argv = sys.argv[1:]
    quick = '--quick' in argv

    banner()
    out = ensure_output_dir('outputs')
    session = KinematicsSession(drag_available=resolve_drag_support(argv),
                                verbose=True)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Parameters
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Parameters")
    try:
        traj = session.update_from_form(parse_overrides(argv))
    except KinematicsError as exc:
        print(f"  ✗ {exc}")
        return 1

    p = session.params
    print(f"  x0={p.x0:g} m  v0={p.v0:g} m/s  a={p.a:g} m/s²  "
          f"t=[{p.t0:g}, {p.t1:g}] s  dt={p.dt:g} s  max_points={p.max_points}")

    if traj.is_empty:
        print("  ✗ No data points generated – check time interval and dt.")
        return 1

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Trajectory
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Trajectory")
    print(traj.summary())
    table_lines = format_table(traj).split('\n')
    for line in table_lines[:12]:
        print(f"  {line}")
    if len(table_lines) > 12:
        print(f"  ... ({traj.n_points - 10} more rows)")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Validation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Validation Against Analytic Solution")
    run_all_validations(verbose=True)

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Edit Propagation
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Edit Propagation")
    session.set_drag_enabled(True)
    edits = []
    if session.can_drag and traj.n_points >= 3:
        mid = traj.n_points // 2
        for series, offset in [('position', 5.0), ('velocity', -2.0),
                               ('acceleration', 4.0)]:
            before = session.snapshot()
            attr = {'position': 'positions', 'velocity': 'velocities',
                    'acceleration': 'accelerations'}[series]
            value = float(getattr(before, attr)[mid]) + offset
            print(f"  drag {series}[{mid}] → {value:.3f}: "
                  f"{format_readout(session.preview_drag(series, mid, value))}")
            readout = session.commit_drag(series, mid, value)
            print(f"  committed            {format_readout(readout)}")
            for name, residual in consistency_report(session.trajectory).items():
                print(f"    {name:<26s} max residual {residual:.3e}")
            edits.append((series, mid, before, session.snapshot()))
    else:
        print("  Edit propagation SKIPPED (dragging unavailable or too few points)")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: CSV Export
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: CSV Export")
    csv_path = write_csv(session.trajectory, f'{out}/kinematics.csv')
    print(f"  ✓ Saved: {csv_path}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Charts
    # ══════════════════════════════════════════════════════════════════════
    if not quick:
        section("PHASE 6: Charts")
        fig = plot_motion(session.trajectory, save_path=f'{out}/01_motion.png')
        plt.close(fig)
        print(f"  ✓ Saved: {out}/01_motion.png")

        fig = plot_series(session.trajectory, save_path=f'{out}/02_series.png')
        plt.close(fig)
        print(f"  ✓ Saved: {out}/02_series.png")

        for n, (series, index, before, after) in enumerate(edits, start=3):
            path = f'{out}/{n:02d}_edit_{series}.png'
            fig = plot_edit_comparison(before, after, series, index, save_path=path)
            plt.close(fig)
            print(f"  ✓ Saved: {path}")

        path = f'{out}/{3 + len(edits):02d}_dashboard.png'
        fig = plot_dashboard(session.trajectory, session.params, save_path=path)
        plt.close(fig)
        print(f"  ✓ Saved: {path}")
    else:
        section("PHASE 6: Charts SKIPPED (--quick mode)")

    session.close()

    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"""
  All outputs saved to: {os.path.abspath(out)}/
  Total runtime: {elapsed:.1f} seconds
""")
    return 0


if __name__ == "__main__":
    sys.exit(main())

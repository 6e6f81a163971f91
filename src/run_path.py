# run_path.py
"""
Run example:
python run_path.py --graph data/graph.pkl --start "37.8716,-122.2590" --goal "37.8700,-122.2680"
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import config
from calcDist import haversine_mi
from directions import route_directions
from errors import GraphInconsistencyError, InvalidQueryError
from load_map import load_graph
from query import RouteQuery
from router import RouteStatus, find_route

EXIT_OK = 0
EXIT_NO_ROUTE = 1
EXIT_INVALID = 2


def configure_logging() -> None:
    if config.DEBUG:
        level = logging.DEBUG
    elif config.VERBOSE:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Find the shortest road path between two coordinates',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_path.py --graph data/graph.pkl --start "37.8716,-122.2590" --goal "37.8700,-122.2680"

  # Plain Dijkstra, with turn-by-turn directions
  python run_path.py --graph map.graphml --start "37.87,-122.26" --goal "37.86,-122.25" --heuristic zero --directions
        """
    )
    parser.add_argument('--graph', type=str, default=config.get_graph_path(),
                        help='Graph file (.pkl or .graphml)')
    parser.add_argument('--start', type=str, required=True, help='Start location: "lat,lon"')
    parser.add_argument('--goal', type=str, required=True, help='Goal location: "lat,lon"')
    parser.add_argument('--heuristic', choices=config.HEURISTIC_MODES,
                        default=config.SEARCH_SETTINGS['heuristic'])
    parser.add_argument('--timeout', type=float, default=config.SEARCH_SETTINGS['timeout'],
                        help='Give up after this many seconds')
    parser.add_argument('--directions', action='store_true', help='Print turn-by-turn directions')
    parser.add_argument('--save_png', type=str, default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    print("=" * 60)
    print("Shortest road path")
    print("=" * 60)

    try:
        graph = load_graph(args.graph)
    except (OSError, ValueError, GraphInconsistencyError) as e:
        print(f"✗ Cannot load graph '{args.graph}': {e}")
        return EXIT_INVALID
    print(f"✓ Graph: {len(graph)} nodes, {graph.edge_count()} edges")

    print("\n[PARSING LOCATIONS]")
    try:
        q = RouteQuery.from_strings(args.start, args.goal).validate(bounds=graph.bounds())
    except InvalidQueryError as e:
        print(f"✗ Invalid query: {e}")
        return EXIT_INVALID
    print(f"✓ Start coordinates: {q.start_lat:.6f}, {q.start_lon:.6f}")
    print(f"✓ Goal coordinates: {q.dest_lat:.6f}, {q.dest_lon:.6f}")

    straight = haversine_mi(q.start_lon, q.start_lat, q.dest_lon, q.dest_lat)
    print(f"\nStraight-line distance: {straight:.3f} miles")

    print("\n[PATHFINDING]")
    result = find_route(graph, q.start_lon, q.start_lat, q.dest_lon, q.dest_lat,
                        heuristic=args.heuristic, timeout=args.timeout)
    print(f"Start node: {result.start}")
    print(f"Goal node: {result.end}")

    if result.status is RouteStatus.CANCELLED:
        print(f"✗ Search cancelled after {result.expanded} expansions.")
        return EXIT_NO_ROUTE
    if not result.found:
        print("✗ No path found.")
        return EXIT_NO_ROUTE

    print("✓ Path found!")
    print(f"  Path length: {len(result.path)} nodes")
    print(f"  Route distance: {result.cost:.3f} miles")
    if straight > 0:
        print(f"  Detour ratio: {result.cost / straight:.2f}x")
    print(f"  Nodes expanded: {result.expanded}")

    if args.directions:
        print("\n[DIRECTIONS]")
        for i, d in enumerate(route_directions(graph, result.path), 1):
            print(f"  {i}. {d}")

    if args.save_png:
        from visualize_map import plot_route

        print("\n[VISUALIZATION]")
        directory = os.path.dirname(args.save_png)
        if directory:
            os.makedirs(directory, exist_ok=True)
        plot_route(graph, result.path, filepath=args.save_png)
        print(f"✓ Saved visualization to: {args.save_png}")

    print("\n" + "=" * 60)
    print("Done!")
    print("=" * 60)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

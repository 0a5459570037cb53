import sys
import os

# Add the 'src' directory to the Python path
# This allows absolute imports from 'frst' without installing the package
project_root = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(project_root, 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from frst.interfaces.cli import run_cli


def main():
    sys.exit(run_cli())


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Sheet Editor - Web app for laying out handwriting practice sheets.

Example:
    Run the development server::

        $ python3 sheet_editor.py --port 5000 --log-level DEBUG
"""

import argparse

from sheet_flask import app, configure_logging


def main(argv=None):
    parser = argparse.ArgumentParser(description='Practice sheet layout server')
    parser.add_argument('--host', default='0.0.0.0', help='Interface to bind (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=5000, help='Port to listen on (default: 5000)')
    parser.add_argument('--debug', action='store_true', help='Enable the Flask debugger')
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    parser.add_argument('--log-file', default=None, help='Also write logs to this file')
    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    import sheet_routes  # noqa: F401 - registers routes

    app.run(debug=args.debug, host=args.host, port=args.port)


if __name__ == '__main__':
    main()

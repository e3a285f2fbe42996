#This python script extracts the cookies of one web site from a Firefox cookies.sqlite
#database by reading the SQLite file format directly.
#
#
#Copyright(C) 2025 Spyder Forensics LLC (www.spyderforensics.com)
#
#This program is free software: you can redistribute it and/or modify
#it under the terms of the GNU General Public License as published by
#the Free Software Foundation, either version 3 of the License, or
#(at your option) any later version.
#
#This program is distributed in the hope that it will be useful,
#but WITHOUT ANY WARRANTY; without even the implied warranty of
#MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#GNU General Public License for more details.
#
#You can view the GNU General Public License at <https://www.gnu.org/licenses/>.
#
# Version History:
# v1.0 2025-10-19


import os
import sys
import logging
import argparse
import datetime
from Modules.configfile import create_template_config, load_config, save_firefox_config
from Modules.cookieextract import COOKIE_TABLE
from Modules.errors import ConfigError, FoxBiteError, NotFoundError
from Modules.firefoxprofile import find_default_cookie_database, read_profile_cookies, session_cookies
from Modules.output_table import cookie_table

logger = logging.getLogger(__name__)

DEFAULT_DOMAIN = "claude.ai"
DEFAULT_LOG_FILE = "FoxBite.log"


#This function creates a logger
def setup_logger(filename, level=logging.INFO):
    logging.basicConfig(filename=filename, level=level, format='%(asctime)s - %(levelname)s: %(message)s', datefmt='%Y-%m-%d %H:%M:%S %Z (UTC %z)')
    return logging.getLogger()


def update_config(config_path, cookies, domain):
    """
    Saves the session cookies to config.json. When they are missing an existing
    valid config is left alone, otherwise a template is written for manual setup.
    """
    try:
        session_key, org_id, cf_clearance = session_cookies(cookies, domain)
    except NotFoundError:
        try:
            load_config(config_path)
            logger.info(f"Session cookies not found, keeping existing config {config_path}")
        except ConfigError as e:
            logger.info(f"Config not ready ({e}), writing template")
            create_template_config(config_path)
            print(f"[!] Template config written to {os.path.abspath(config_path)}, fill it in by hand")
        raise

    save_firefox_config(config_path, session_key, org_id, cf_clearance)
    return load_config(config_path)


def _main(db_file, profiles_dir, domain, table_name, config_path, show_values):
    print(r"""
  ______          ____  _ _
 |  ____|        |  _ \(_) |
 | |__ _____  __ | |_) |_| |_ ___
 |  __/ _ \ \/ / |  _ <| | __/ _ \
 | | | (_) >  <  | |_) | | ||  __/
 |_|  \___/_/\_\ |____/|_|\__\___|

Chomping Firefox Cookie Stores One Page at a time

Version: 1.0 October, 2025
Author: Spyder Forensics Training
Website: www.spyderforensics.com

Not Currently Supported:

- Overflow Pages (long cookie values are cut at the inline payload limit)
- Write-Ahead Log and Rollback Journal files
""")

    start_time = datetime.datetime.now()
    print(f"Cookie Extraction Started: {start_time.strftime('%Y-%m-%d %H:%M:%S')}\n")

    if not db_file:
        db_file = find_default_cookie_database(profiles_dir)
        print(f"[+] Firefox cookie database: {db_file}")

    logger.info(f"Input file full path: {os.path.abspath(db_file)}")
    cookies = read_profile_cookies(db_file, domain, table_name)

    if cookies:
        print(f"[+] {len(cookies)} cookies found for '{domain}'\n")
        print(cookie_table(cookies, show_values))
    else:
        print(f"[!] No cookies found for '{domain}'")

    if config_path:
        update_config(config_path, cookies, domain)
        print(f"\n[+] Session cookies saved to {os.path.abspath(config_path)}")

    end_time = datetime.datetime.now()
    print(f"\nCookie Extraction Completed: {end_time.strftime('%Y-%m-%d %H:%M:%S')}")

    elapsed_time = end_time - start_time
    hours, remainder = divmod(elapsed_time.total_seconds(), 3600)
    minutes, seconds = divmod(remainder, 60)
    print(f"Total execution time: {int(hours):02d}:{int(minutes):02d}:{seconds:05.2f}")
    return cookies


def build_parser():
    tool_name = "Tool Name: FoxBite"
    description = (
        "Description: This python script developed by Spyder Forensics LLC reads the "
        "cookies of a web site from a Firefox cookies.sqlite database without using SQLite."
    )
    usage = (
        "Usage Example: python FoxBite.py -i C:\\Evidence\\cookies.sqlite "
        "-d claude.ai -c C:\\Reports\\config.json"
    )

    parser = argparse.ArgumentParser(
        description=f"{tool_name}\n{description}\n",
        epilog=usage,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument('-i', dest="db_file", metavar='db_path', required=False, help="(Optional) Path to cookies.sqlite. Defaults to the default Firefox profile.")
    parser.add_argument('-p', dest="profiles_dir", metavar='profiles_dir', required=False, help="(Optional) Firefox directory holding profiles.ini")
    parser.add_argument('-d', dest="domain", metavar='domain', default=DEFAULT_DOMAIN, help=f"(Optional) Host substring to match. Default: {DEFAULT_DOMAIN}")
    parser.add_argument('-t', dest="table_name", metavar='table', default=COOKIE_TABLE, help=f"(Optional) Cookie table name. Default: {COOKIE_TABLE}")
    parser.add_argument('-c', dest="config_path", metavar='config_path', required=False, help="(Optional) Save sessionKey, lastActiveOrg and cf_clearance to this config.json")
    parser.add_argument('-l', dest="log_file", metavar='log_file', default=DEFAULT_LOG_FILE, help=f"(Optional) Log file. Default: {DEFAULT_LOG_FILE}")
    parser.add_argument('-v', action='store_true', required=False, help="(Optional) Debug logging")
    parser.add_argument('--show-values', dest="show_values", action='store_true', help="(Optional) Print cookie values unmasked")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logger(args.log_file, logging.DEBUG if args.v else logging.INFO)
    logger.info("Script: FoxBite")

    try:
        _main(args.db_file, args.profiles_dir, args.domain, args.table_name, args.config_path, args.show_values)
    except (FoxBiteError, OSError) as e:
        print(f"[!] {e}")
        logger.error(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

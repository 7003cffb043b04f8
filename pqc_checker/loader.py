import logging
import os
from typing import List, Sequence

from pqc_checker.exceptions import InputError

logger = logging.getLogger(__name__)


class UrlLoader:
    def resolve(self, args: Sequence[str]) -> List[str]:
        """
        Turn command-line arguments into the list of URLs to check.

        A single argument naming an existing file is read as one URL per line.
        Anything else is taken as URLs verbatim.
        """
        if len(args) == 1 and os.path.isfile(args[0]):
            urls = self.load_from_file(args[0])
        else:
            urls = [a.strip() for a in args if a.strip()]

        if not urls:
            raise InputError("No URLs to check")
        return urls

    def load_from_file(self, file_path: str) -> List[str]:
        """
        Load newline-delimited URLs, skipping blank lines.
        """
        urls = []
        with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
            for line in f:
                line = line.strip()
                if line:
                    urls.append(line)

        logger.info(f"Loaded {len(urls)} URL(s) from {file_path}")
        return urls

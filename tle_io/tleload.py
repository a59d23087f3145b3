# read/split tle text

from tle_io.errors import MissingLine


class TLELoader:

    @staticmethod
    def read_lines(text): # returns list[str] of 2 or 3 lines
        lines = []
        for ln in text.splitlines():
            if ln.strip():
                lines.append(ln.rstrip())

        if len(lines) not in (2, 3):
            raise MissingLine(expected=3, actual=len(lines))

        return lines

    @staticmethod
    def split_name(lines):
        """ -> (name, line1, line2). name is "" for a bare 2 line set """
        if len(lines) == 3:
            return lines[0].strip(), lines[1], lines[2]
        return "", lines[0], lines[1]

"""
Funnel functions shared by both clients, for moving console text on and off the wire
"""

from typing import Union


class Helpers:
    """Static functions, to use as helpers"""

    @staticmethod
    def bin_encode(message: str) -> bytes:
        """
        Funnel function turning one console line into the bytes put on the wire

        Args:
            message: Console line, without its line ending
        Returns:
            UTF-8 encoded message
        """
        return message.encode('utf-8')

    @staticmethod
    def bin_text(item: Union[str, bytes]) -> str:
        """
        Counterpart of bin_encode. Decodes a bytes string as UTF-8, swapping invalid sequences for
        the replacement character. Regular strings pass through

        Args:
            item: bytes or regular string
        Returns:
            Text safe to print
        """
        try:
            return item.decode('utf-8', errors='replace')
        except AttributeError:
            return str(item)

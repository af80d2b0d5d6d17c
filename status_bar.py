import os
import time


def render_status(context, width):
    """
    context keys: status_msg, status_until, focus, file_path, loaded_rows,
                  total_rows, eod, row, column, column_count, filter
    """
    text = ""
    now = time.time()
    if context.get('status_msg') and now < context.get('status_until', 0):
        text = f" {context['status_msg']}"
    else:
        focus = context.get('focus', 'table')
        mode = 'FILTER' if focus == 'filter' else 'TABLE'
        fname = context.get('file_path') or ''
        if fname:
            fname = os.path.basename(fname)
        loaded = context.get('loaded_rows', 0)
        total = context.get('total_rows', 0)
        eod = ' EOD' if context.get('eod') else ''
        row = context.get('row')
        row_text = '-' if row is None else str(row + 1)
        col_text = f"{context.get('column', 0) + 1}/{context.get('column_count', 0)}"
        text = f" {mode} | {fname} | rows {loaded}/{total}{eod} | row {row_text} col {col_text}"
        if context.get('filter'):
            text += f" | filter: {context['filter']}"

    return text.ljust(width)[:width]

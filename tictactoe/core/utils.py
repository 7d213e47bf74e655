from tictactoe.core.board import MAX_SCORE


def format_score(score):
    if score >= MAX_SCORE:
        return "win"
    if score <= -MAX_SCORE:
        return "loss"
    return f"h {score:g}"


def format_info(depth_limit, score, nodes, elapsed, move):
    depth_str = "full" if depth_limit is None else str(depth_limit)
    move_str = f"{move.row},{move.col}" if move is not None else "-"
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    return (f"info depth {depth_str} score {format_score(score)} nodes {nodes} "
            f"nps {nps} time {int(elapsed * 1000)} move {move_str}")


def format_trace(depth, mark, move, score):
    indent = "  " * depth
    move_str = f"{move.row},{move.col}" if move is not None else "leaf"
    return f"{indent}[{depth}] {mark!s} {move_str} -> {format_score(score)}"

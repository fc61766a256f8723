import asyncio

from client.app.core.config import configure_logging, get_settings
from client.app.core.dialog import ConsoleBookDialog, StaticBookDialog
from client.app.engine.bridge import LocalEngineBridge
from client.app.models.enums import Cell
from client.app.services.board_decoder import render_board, render_scores
from client.app.services.interaction_controller import InteractionController


def show(controller: InteractionController):
    print("\n" + render_board(controller.board))
    print(render_scores(controller.state.scores))
    if controller.notice:
        print(f"! {controller.notice}")


async def main():
    settings = get_settings()
    configure_logging(settings.log_level)

    print("=======================================")
    print("   CONNECT FOUR: Opening Book Explorer")
    print("=======================================")

    dialog = StaticBookDialog(settings.book_path) if settings.book_path else ConsoleBookDialog()
    controller = InteractionController(LocalEngineBridge(), dialog)

    # Cancel (blank path) or a bad file lets the user try again
    while not await controller.open_book():
        if controller.notice:
            print(controller.notice)
        controller.dialog = ConsoleBookDialog()

    show(controller)

    while True:
        player = "X" if controller.current_player == Cell.PLAYER_ONE else "O"
        user_input = (await asyncio.to_thread(input, f"\n[{player}] Column 1-7, (b)ack, (r)eset, (q)uit: ")).strip().lower()

        if user_input == "q":
            break
        elif user_input == "b":
            await controller.undo()
        elif user_input == "r":
            await controller.reset()
        elif user_input.isdigit():
            await controller.play_column(int(user_input))
        else:
            print("Unknown command.")
            continue

        show(controller)


if __name__ == "__main__":
    asyncio.run(main())

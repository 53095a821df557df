"""
Trello tools — boards, lists and cards through the rate-limited Trello client.
"""

from tools.trello import (
    configure, boards, lists, cards_list, activity,
    card_create, card_update, card_comment,
)


TOOLS = [
    configure.TOOL,
    boards.TOOL,
    *lists.TOOLS,
    *cards_list.TOOLS,
    activity.TOOL,
    card_create.TOOL,
    *card_update.TOOLS,
    card_comment.TOOL,
]

HANDLERS = {
    "configureTrello": configure.handle,
    "getBoards": boards.handle,
    "getLists": lists.handle_get_lists,
    "addList": lists.handle_add_list,
    "archiveList": lists.handle_archive_list,
    "getCardsByList": cards_list.handle_cards_by_list,
    "getMyCards": cards_list.handle_my_cards,
    "getRecentActivity": activity.handle,
    "addCard": card_create.handle,
    "updateCard": card_update.handle_update,
    "moveCard": card_update.handle_move,
    "changeCardMembers": card_update.handle_members,
    "archiveCard": card_update.handle_archive,
    "addComment": card_comment.handle,
}

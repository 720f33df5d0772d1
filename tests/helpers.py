from merge_affiliations.constants import SEARCH_AUTHOR_SEPARATOR


def submission_row(id2, title_j, title_e, volume1, inputnum, name_j, name_e,
                   membernum="", orgname_j="東京大学", orgname_e="Univ. of Tokyo", id1="2010"):
    return [
        id1, id2, "A", title_j, title_e, volume1, inputnum,
        name_j, name_e, membernum, "0001", orgname_j, orgname_e,
    ]


def search_row(paper_id, vol, num, title, authors, abstract="abstract", keyword="kw",
               passthrough=None):
    columns = [
        paper_id, vol, num, "1", "10", "2010/03", title,
        SEARCH_AUTHOR_SEPARATOR.join(authors), abstract, keyword,
        "Regular Section", "論文", "D", "Pattern Recognition",
        title, SEARCH_AUTHOR_SEPARATOR.join(authors), abstract, keyword,
    ]
    if passthrough:
        columns.extend(passthrough)
    return columns


def write_tsv(path, rows, header_lines=2):
    with open(path, 'w', encoding='utf-8', newline='') as f:
        for i in range(header_lines):
            f.write(f"header {i}\r\n")
        for row in rows:
            f.write("\t".join(row) + "\r\n")

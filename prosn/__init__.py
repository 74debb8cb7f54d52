"""ProSN — 학습 커뮤니티 API (문제/정보 게시글, 문제 풀이, 스터디 그룹).

ProSN — Study community API: problem/information posts, solvings,
and study groups.
"""

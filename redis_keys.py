REDIS_ROOM_KEY = "room:{room_id}" # room id - full JSON room document

# **Room document fields**
# - `id`, `name`, `method`, `createdBy`, `createdByName` = copied from roomData
# - `snapshot` = opaque client document state
# - `activeUsers` = list of user objects, unique by `id`
# - `operations` = list of operation objects (capped, see constants.MAX_OPERATIONS)
# - `lastUpdated` = epoch milliseconds of the last write
